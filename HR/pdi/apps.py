"""
PDI App Configuration
"""
from django.apps import AppConfig


class PdiConfig(AppConfig):
    """Individual development plan: objectives, comments and achievements"""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'HR.pdi'
    label = 'pdi'
    verbose_name = 'Individual Development Plan'

    def ready(self):
        from HR.pdi import sample_data
        sample_data.register()
