from django.apps import AppConfig


class TeamsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'HR.teams'
    label = 'teams'
    verbose_name = 'Teams'

    def ready(self):
        from HR.teams import sample_data
        sample_data.register()
