"""
URL configuration for pdi_project.

Each domain module mounts its own urls.py:
    auth/      - register, login, logout, token refresh
    accounts/  - own profile and admin user management
    core/      - access policy endpoints (data source mode)
    hr/        - career, PDI, assessments, teams, wellness, dashboard
"""
from django.urls import path, include

urlpatterns = [
    path('core/', include('core.urls')),
    path('hr/', include('HR.urls')),

    # Authentication endpoints (register, login, logout, tokens)
    path('auth/', include('core.user_accounts.auth_urls')),

    # Account management endpoints (profile, users, etc.)
    path('accounts/', include('core.user_accounts.urls')),
]
