"""
HR App - Main URL Configuration
This file routes URLs to the appropriate sub-apps within the HR module.
"""
from django.urls import path, include

app_name = 'hr'

urlpatterns = [
    path('career/', include('HR.career.urls')),
    path('pdi/', include('HR.pdi.urls')),
    path('assessment/', include('HR.assessment.urls')),
    path('teams/', include('HR.teams.urls')),
    path('wellness/', include('HR.wellness.urls')),
    path('dashboard/', include('HR.dashboard.urls')),
    path('action-groups/', include('HR.action_groups.urls')),
]
