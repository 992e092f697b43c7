"""
Shared helpers for tests across the core and HR apps.
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient


def make_user(email, role='colaborador', nome=None, gestor=None, password='pass1234', **extra):
    """Create an active account with the given role."""
    User = get_user_model()
    return User.objects.create_user(
        email=email,
        nome=nome or email.split('@')[0].title(),
        password=password,
        role=role,
        gestor=gestor,
        **extra
    )


def make_org():
    """
    Build the small organisation most scenario tests use:

        admin, rh, gestor (manages colab), colab, outsider (no supervisor),
        other_gestor (manages no one).
    """
    admin = make_user('admin@pdi.test', role='admin', nome='Admin')
    rh = make_user('rh@pdi.test', role='rh', nome='Rita RH')
    gestor = make_user('gestor@pdi.test', role='gestor', nome='Gabriel Gestor')
    other_gestor = make_user('gestor2@pdi.test', role='gestor', nome='Olga Gestora')
    colab = make_user('colab@pdi.test', role='colaborador', nome='Carla Colab', gestor=gestor)
    outsider = make_user('outsider@pdi.test', role='colaborador', nome='Otto Outsider')
    return {
        'admin': admin,
        'rh': rh,
        'gestor': gestor,
        'other_gestor': other_gestor,
        'colab': colab,
        'outsider': outsider,
    }


def client_for(user):
    """APIClient authenticated as the given user."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


def reset_data_source(mode='live'):
    """Put the process-wide data source back into ``mode``."""
    from django.apps import apps
    return apps.get_app_config('security').data_source.set_mode(mode)
