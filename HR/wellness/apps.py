from django.apps import AppConfig


class WellnessConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'HR.wellness'
    label = 'wellness'
    verbose_name = 'HR Wellness'

    def ready(self):
        from HR.wellness import sample_data
        sample_data.register()
