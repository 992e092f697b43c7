"""
Account endpoints: own profile and admin account management.
"""
from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('profile/', views.user_profile, name='user_profile'),
    path('admin/users/', views.admin_user_list, name='admin_user_list'),
    path('admin/users/<int:user_id>/role/', views.admin_user_role, name='admin_user_role'),
    path('admin/users/<int:user_id>/supervisor/', views.admin_user_supervisor, name='admin_user_supervisor'),
    path('admin/users/<int:user_id>/deactivate/', views.admin_user_deactivate, name='admin_user_deactivate'),
]
