"""
Tests for the authentication, profile and account administration endpoints.
"""
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from core.base.test_utils import client_for, make_org, make_user
from core.security.roles import Role

User = get_user_model()


class RegistrationAPITest(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.url = '/auth/register/'
        self.valid_data = {
            'email': 'newuser@pdi.test',
            'nome': 'New User',
            'password': 'SecurePass123',
            'confirm_password': 'SecurePass123',
        }

    def test_register_user_success(self):
        response = self.client.post(self.url, self.valid_data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user']['email'], 'newuser@pdi.test')
        self.assertEqual(response.data['user']['role'], Role.COLABORADOR)
        self.assertIn('access', response.data['tokens'])
        self.assertIn('refresh', response.data['tokens'])

    def test_register_ignores_requested_role(self):
        data = dict(self.valid_data, role='admin')
        self.client.post(self.url, data, format='json')
        self.assertEqual(User.objects.get(email='newuser@pdi.test').role, Role.COLABORADOR)

    def test_register_duplicate_email(self):
        self.client.post(self.url, self.valid_data, format='json')
        response = self.client.post(self.url, self.valid_data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_register_password_mismatch(self):
        data = dict(self.valid_data, confirm_password='OtherPass123')
        response = self.client.post(self.url, data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('confirm_password', response.data)

    def test_register_weak_password(self):
        data = dict(self.valid_data, password='weakpass', confirm_password='weakpass')
        response = self.client.post(self.url, data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class LoginLogoutAPITest(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = make_user('login@pdi.test', password='TestPass123')

    def login(self, password='TestPass123'):
        return self.client.post(
            '/auth/login/',
            {'email': 'login@pdi.test', 'password': password},
            format='json'
        )

    def test_login_success(self):
        response = self.login()
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('tokens', response.data)
        self.assertEqual(response.data['user']['id'], self.user.pk)

    def test_login_wrong_password(self):
        response = self.login(password='Wrong123')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_login_missing_fields(self):
        response = self.client.post('/auth/login/', {'email': 'login@pdi.test'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_inactive_account_cannot_login(self):
        self.user.deactivate()
        response = self.login()
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_token_refresh_and_logout(self):
        tokens = self.login().data['tokens']

        response = self.client.post('/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = self.client.post('/auth/logout/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.post('/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_with_invalid_token(self):
        client = client_for(self.user)
        response = client.post('/auth/logout/', {'refresh': 'not-a-token'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class ProfileAPITest(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.org = make_org()

    def test_get_own_profile(self):
        response = client_for(self.org['colab']).get('/accounts/profile/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], 'colab@pdi.test')
        self.assertEqual(response.data['gestor_id'], self.org['gestor'].pk)
        self.assertEqual(response.data['gestor_nome'], 'Gabriel Gestor')

    def test_update_own_profile(self):
        response = client_for(self.org['colab']).patch(
            '/accounts/profile/', {'bio': 'Backend dev', 'localizacao': 'Recife'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['bio'], 'Backend dev')

    def test_role_and_status_not_self_editable(self):
        client_for(self.org['colab']).patch(
            '/accounts/profile/', {'role': 'admin', 'status': 'inativo'}, format='json'
        )
        colab = User.objects.get(pk=self.org['colab'].pk)
        self.assertEqual(colab.role, Role.COLABORADOR)
        self.assertEqual(colab.status, 'ativo')

    def test_inactive_user_blocked(self):
        colab = self.org['colab']
        colab.deactivate()
        response = client_for(colab).get('/accounts/profile/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class AdminUserManagementAPITest(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.org = make_org()

    def test_admin_lists_users(self):
        response = client_for(self.org['admin']).get('/accounts/admin/users/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        results = response.data['data']['results']
        self.assertEqual(len(results), len(self.org))

    def test_admin_filters_by_role_and_search(self):
        client = client_for(self.org['admin'])
        response = client.get('/accounts/admin/users/', {'role': 'gestor'})
        self.assertEqual(
            {row['email'] for row in response.data['data']['results']},
            {'gestor@pdi.test', 'gestor2@pdi.test'}
        )
        response = client.get('/accounts/admin/users/', {'search': 'otto'})
        self.assertEqual([row['email'] for row in response.data['data']['results']], ['outsider@pdi.test'])

    def test_non_admin_cannot_list(self):
        for key in ('gestor', 'rh', 'colab'):
            response = client_for(self.org[key]).get('/accounts/admin/users/')
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_assigns_role(self):
        url = f"/accounts/admin/users/{self.org['colab'].pk}/role/"
        response = client_for(self.org['admin']).post(url, {'role': 'gestor'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['role'], Role.GESTOR)

    def test_gestor_cannot_assign_role(self):
        url = f"/accounts/admin/users/{self.org['colab'].pk}/role/"
        response = client_for(self.org['gestor']).post(url, {'role': 'admin'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(User.objects.get(pk=self.org['colab'].pk).role, Role.COLABORADOR)

    def test_user_cannot_promote_self(self):
        colab = self.org['colab']
        response = client_for(colab).post(f'/accounts/admin/users/{colab.pk}/role/', {'role': 'admin'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_cannot_change_own_role(self):
        admin = self.org['admin']
        response = client_for(admin).post(f'/accounts/admin/users/{admin.pk}/role/', {'role': 'rh'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_role_assignment_unknown_user(self):
        response = client_for(self.org['admin']).post('/accounts/admin/users/99999/role/', {'role': 'rh'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_assigns_supervisor(self):
        outsider = self.org['outsider']
        url = f'/accounts/admin/users/{outsider.pk}/supervisor/'
        response = client_for(self.org['admin']).post(url, {'gestor_id': self.org['other_gestor'].pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['gestor_id'], self.org['other_gestor'].pk)

    def test_supervisor_must_be_gestor_or_admin(self):
        outsider = self.org['outsider']
        url = f'/accounts/admin/users/{outsider.pk}/supervisor/'
        response = client_for(self.org['admin']).post(url, {'gestor_id': self.org['colab'].pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_clear_supervisor(self):
        colab = self.org['colab']
        url = f'/accounts/admin/users/{colab.pk}/supervisor/'
        response = client_for(self.org['admin']).post(url, {'gestor_id': None}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['gestor_id'])

    def test_admin_deactivates_user(self):
        colab = self.org['colab']
        with self.assertLogs('core.user_accounts.services', level='INFO'):
            response = client_for(self.org['admin']).post(f'/accounts/admin/users/{colab.pk}/deactivate/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'inativo')

    def test_admin_cannot_deactivate_self(self):
        admin = self.org['admin']
        response = client_for(admin).post(f'/accounts/admin/users/{admin.pk}/deactivate/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
