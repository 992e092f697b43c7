"""
URL configuration for the PDI app.
"""
from django.urls import path

from . import views

app_name = 'pdi'

urlpatterns = [
    path('objectives/', views.objective_list, name='objective_list'),
    path('objectives/<int:pk>/', views.objective_detail, name='objective_detail'),
    path('objectives/<int:pk>/evaluate/', views.objective_evaluate, name='objective_evaluate'),
    path('objectives/<int:objective_id>/comments/', views.comment_list, name='comment_list'),
    path('comments/<int:pk>/', views.comment_detail, name='comment_detail'),
    path('achievements/', views.achievement_list, name='achievement_list'),
    path('mentors/', views.mentor_list, name='mentor_list'),
    path('next-objective/', views.next_objective, name='next_objective'),
]
