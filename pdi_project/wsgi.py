"""
WSGI config for the PDI backend.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'pdi_project.settings')

application = get_wsgi_application()
