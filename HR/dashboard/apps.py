from django.apps import AppConfig


class DashboardConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'HR.dashboard'
    label = 'dashboard'
    verbose_name = 'Dashboard'

    def ready(self):
        from HR.dashboard import sample_data
        sample_data.register()
