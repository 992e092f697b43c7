"""
URL configuration for the wellness app.
"""
from django.urls import path

from . import views

app_name = 'wellness'

urlpatterns = [
    path('records/', views.record_list, name='record_list'),
    path('records/create/', views.record_create, name='record_create'),
    path('records/<int:pk>/', views.record_detail, name='record_detail'),
    path('tests/', views.hr_test_list, name='hr_test_list'),
    path('tests/<int:pk>/complete/', views.hr_test_complete, name='hr_test_complete'),
]
