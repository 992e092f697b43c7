"""
Tests for the data source endpoint, middleware and role decorators.
"""
from django.test import RequestFactory, TestCase
from rest_framework import status
from rest_framework.test import APIClient

from core.base.test_utils import client_for, make_org, reset_data_source
from core.security.decorators import require_roles
from core.security.fallback import DataSourceMode
from core.security.middleware import DataSourceMiddleware, get_data_source
from core.security.roles import Role

URL = '/core/security/data-source/'


class DataSourceEndpointTest(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.org = make_org()

    def tearDown(self):
        reset_data_source()

    def test_anonymous_rejected(self):
        response = APIClient().get(URL)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_get_mode(self):
        response = client_for(self.org['colab']).get(URL)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['mode'], DataSourceMode.LIVE)
        self.assertFalse(response.data['is_degraded'])

    def test_admin_toggles(self):
        client = client_for(self.org['admin'])
        response = client.post(URL, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['is_degraded'])
        self.assertTrue(get_data_source().is_degraded)

        response = client.post(URL, {}, format='json')
        self.assertFalse(response.data['is_degraded'])

    def test_admin_sets_mode(self):
        response = client_for(self.org['admin']).post(URL, {'mode': 'degraded'}, format='json')
        self.assertEqual(response.data['mode'], DataSourceMode.DEGRADED)

    def test_invalid_mode(self):
        response = client_for(self.org['admin']).post(URL, {'mode': 'offline'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_admin_cannot_change_mode(self):
        for key in ('gestor', 'rh', 'colab'):
            response = client_for(self.org[key]).post(URL, {}, format='json')
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(get_data_source().is_degraded)

    def test_inactive_user_rejected(self):
        colab = self.org['colab']
        colab.deactivate()
        response = client_for(colab).get(URL)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class MiddlewareTest(TestCase):

    def test_request_gets_process_wide_context(self):
        seen = []
        middleware = DataSourceMiddleware(lambda request: seen.append(request.data_source))
        middleware(RequestFactory().get('/'))
        self.assertIs(seen[0], get_data_source())

    def test_get_data_source_prefers_request_attribute(self):
        request = RequestFactory().get('/')
        request.data_source = 'custom'
        self.assertEqual(get_data_source(request), 'custom')


class RequireRolesTest(TestCase):

    def test_records_required_roles(self):
        @require_roles(Role.ADMIN, Role.RH)
        def view(request):
            return None

        self.assertEqual(view.required_roles, (Role.ADMIN, Role.RH))
