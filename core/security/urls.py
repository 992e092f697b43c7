from django.urls import path

from core.security import views

app_name = 'security'

urlpatterns = [
    path('data-source/', views.data_source_mode, name='data-source'),
]
