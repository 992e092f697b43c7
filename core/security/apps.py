from django.apps import AppConfig
from django.conf import settings


class SecurityConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core.security'
    label = 'security'
    verbose_name = 'Access Policy'

    def ready(self):
        from core.security.fallback import DataSourceContext

        self.data_source = DataSourceContext(
            getattr(settings, 'PDI_DATA_SOURCE_INITIAL_MODE', 'live')
        )
