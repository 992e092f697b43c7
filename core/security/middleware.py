"""
Attach the process-wide DataSourceContext to every request.
"""
from django.apps import apps


def get_data_source(request=None):
    """
    Return the DataSourceContext for a request, falling back to the
    process-wide one kept on the security app config.
    """
    data_source = getattr(request, 'data_source', None) if request is not None else None
    if data_source is not None:
        return data_source
    return apps.get_app_config('security').data_source


class DataSourceMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.data_source = apps.get_app_config('security').data_source
        return self.get_response(request)
