from django.apps import AppConfig


class ActionGroupsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'HR.action_groups'
    label = 'action_groups'
    verbose_name = 'Action Groups'

    def ready(self):
        from HR.action_groups import sample_data
        sample_data.register()
