"""
URL configuration for the action groups app.
"""
from django.urls import path

from . import views

app_name = 'action_groups'

urlpatterns = [
    path('groups/', views.group_list, name='group_list'),
    path('groups/<int:pk>/', views.group_detail, name='group_detail'),
    path('groups/<int:pk>/members/', views.group_member_add, name='group_member_add'),
    path('groups/<int:pk>/members/<int:user_id>/', views.group_member_remove, name='group_member_remove'),
    path('groups/<int:pk>/tasks/', views.task_list, name='task_list'),
    path('tasks/<int:pk>/', views.task_detail, name='task_detail'),
]
