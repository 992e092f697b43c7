"""
URL configuration for the career app.
"""
from django.urls import path

from . import views

app_name = 'career'

urlpatterns = [
    path('tracks/', views.track_list, name='track_list'),
    path('tracks/<int:pk>/', views.track_detail, name='track_detail'),
    path('competencies/', views.competency_list, name='competency_list'),
    path('salary-history/', views.salary_history_list, name='salary_history_list'),
]
