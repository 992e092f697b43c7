"""
URL configuration for the teams app.
"""
from django.urls import path

from . import views

app_name = 'teams'

urlpatterns = [
    path('teams/', views.team_list, name='team_list'),
    path('teams/create/', views.team_create, name='team_create'),
    path('teams/<int:pk>/', views.team_detail, name='team_detail'),
    path('teams/<int:pk>/members/', views.team_member_add, name='team_member_add'),
    path('teams/<int:pk>/members/<int:user_id>/', views.team_member_remove, name='team_member_remove'),
    path('touchpoints/', views.touchpoint_list, name='touchpoint_list'),
    path('touchpoints/one-on-one/', views.touchpoint_one_on_one, name='touchpoint_one_on_one'),
    path('touchpoints/feedback/', views.touchpoint_feedback, name='touchpoint_feedback'),
    path(
        'touchpoints/performance-review/',
        views.touchpoint_performance_review,
        name='touchpoint_performance_review'
    ),
]
