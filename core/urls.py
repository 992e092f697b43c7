"""
URL Configuration for Core module.
Accounts are mounted separately at /auth/ and /accounts/.
"""
from django.urls import path, include

app_name = 'core'

urlpatterns = [
    # Access policy sub-app URLs
    path('security/', include('core.security.urls')),
]
