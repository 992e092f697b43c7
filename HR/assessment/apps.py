from django.apps import AppConfig


class AssessmentConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'HR.assessment'
    label = 'assessment'
    verbose_name = 'Competency Assessment'

    def ready(self):
        from HR.assessment import sample_data
        sample_data.register()
