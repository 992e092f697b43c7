"""
URL configuration for the assessment app.
"""
from django.urls import path

from . import views

app_name = 'assessment'

urlpatterns = [
    path('assessments/', views.assessment_list, name='assessment_list'),
    path('assessments/manager/', views.manager_assessment, name='manager_assessment'),
    path('report/<int:user_id>/', views.assessment_report, name='assessment_report'),
]
