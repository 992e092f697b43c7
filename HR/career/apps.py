"""
Career App Configuration
"""
from django.apps import AppConfig


class CareerConfig(AppConfig):
    """Career tracks, stages, competencies and salary history"""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'HR.career'
    label = 'career'
    verbose_name = 'Career Tracks'

    def ready(self):
        from HR.career import sample_data
        sample_data.register()
