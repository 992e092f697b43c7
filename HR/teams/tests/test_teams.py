"""
Tests for team management.
"""
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from core.base.test_utils import client_for, make_org, reset_data_source
from HR.teams.models import Team, Touchpoint

User = get_user_model()


class TeamAPITest(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.org = make_org()
        cls.team = Team.objects.create(
            nome='Plataforma', leader=cls.org['gestor'], created_by=cls.org['gestor']
        )
        colab = cls.org['colab']
        colab.time = cls.team
        colab.save()

    def tearDown(self):
        reset_data_source()

    def test_list_teams(self):
        response = client_for(self.org['outsider']).get('/hr/teams/teams/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        row = response.data['data']['results'][0]
        self.assertEqual(row['nome'], 'Plataforma')
        self.assertEqual(row['member_ids'], [self.org['colab'].pk])
        self.assertFalse(row['confidential'])

    def test_search_teams(self):
        Team.objects.create(nome='Dados', leader=self.org['other_gestor'])
        response = client_for(self.org['colab']).get('/hr/teams/teams/', {'search': 'dad'})
        self.assertEqual([row['nome'] for row in response.data['data']['results']], ['Dados'])

    def test_gestor_creates_team_and_leads_it(self):
        response = client_for(self.org['other_gestor']).post(
            '/hr/teams/teams/create/',
            {'nome': 'Mobile', 'member_ids': [self.org['outsider'].pk]},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['leader_id'], self.org['other_gestor'].pk)
        self.assertEqual(User.objects.get(pk=self.org['outsider'].pk).time_id, response.data['id'])

    def test_colaborador_cannot_create_team(self):
        response = client_for(self.org['colab']).post('/hr/teams/teams/create/', {'nome': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_leader_must_be_gestor_or_admin(self):
        response = client_for(self.org['admin']).post(
            '/hr/teams/teams/create/',
            {'nome': 'X', 'leader_id': self.org['colab'].pk},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_while_degraded_returns_503(self):
        reset_data_source('degraded')
        response = client_for(self.org['gestor']).post('/hr/teams/teams/create/', {'nome': 'Y'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertFalse(Team.objects.filter(nome='Y').exists())

    def test_leader_updates_team(self):
        response = client_for(self.org['gestor']).patch(
            f'/hr/teams/teams/{self.team.pk}/', {'descricao': 'Infra'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['descricao'], 'Infra')

    def test_other_gestor_cannot_update(self):
        response = client_for(self.org['other_gestor']).patch(
            f'/hr/teams/teams/{self.team.pk}/', {'nome': 'Hijack'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_only_admin_dissolves(self):
        url = f'/hr/teams/teams/{self.team.pk}/'
        response = client_for(self.org['gestor']).delete(url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = client_for(self.org['admin']).delete(url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertIsNone(User.objects.get(pk=self.org['colab'].pk).time_id)
        self.assertFalse(Team.objects.active().filter(pk=self.team.pk).exists())

    def test_membership_is_exclusive(self):
        other = Team.objects.create(nome='Dados', leader=self.org['admin'])
        response = client_for(self.org['admin']).post(
            f'/hr/teams/teams/{other.pk}/members/', {'user_id': self.org['colab'].pk}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(User.objects.get(pk=self.org['colab'].pk).time_id, other.pk)
        self.assertEqual(self.team.member_ids, [])

    def test_leader_cannot_take_member_of_another_team(self):
        other = Team.objects.create(nome='Dados', leader=self.org['other_gestor'])
        response = client_for(self.org['other_gestor']).post(
            f'/hr/teams/teams/{other.pk}/members/', {'user_id': self.org['colab'].pk}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(User.objects.get(pk=self.org['colab'].pk).time_id, self.team.pk)

    def test_leader_moves_member_between_own_teams(self):
        other = Team.objects.create(nome='Dados', leader=self.org['gestor'])
        response = client_for(self.org['gestor']).post(
            f'/hr/teams/teams/{other.pk}/members/', {'user_id': self.org['colab'].pk}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(User.objects.get(pk=self.org['colab'].pk).time_id, other.pk)

    def test_leader_cannot_place_admin(self):
        response = client_for(self.org['gestor']).post(
            f'/hr/teams/teams/{self.team.pk}/members/', {'user_id': self.org['admin'].pk}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIsNone(User.objects.get(pk=self.org['admin'].pk).time_id)

    def test_create_cannot_pull_members_from_another_team(self):
        response = client_for(self.org['other_gestor']).post(
            '/hr/teams/teams/create/',
            {'nome': 'Mobile', 'member_ids': [self.org['colab'].pk]},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Team.objects.filter(nome='Mobile').exists())
        self.assertEqual(User.objects.get(pk=self.org['colab'].pk).time_id, self.team.pk)

    def test_remove_member(self):
        response = client_for(self.org['gestor']).delete(
            f"/hr/teams/teams/{self.team.pk}/members/{self.org['colab'].pk}/"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['member_ids'], [])

    def test_remove_non_member(self):
        response = client_for(self.org['gestor']).delete(
            f"/hr/teams/teams/{self.team.pk}/members/{self.org['outsider'].pk}/"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_member_cannot_manage_team(self):
        response = client_for(self.org['colab']).post(
            f'/hr/teams/teams/{self.team.pk}/members/', {'user_id': self.org['outsider'].pk}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class TouchpointAPITest(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.org = make_org()
        cls.feedback = Touchpoint.objects.create(
            colaborador=cls.org['colab'], gestor=cls.org['gestor'],
            tipo=Touchpoint.Tipo.FEEDBACK, feedback='Boa entrega'
        )
        Touchpoint.objects.create(
            colaborador=cls.org['outsider'], gestor=cls.org['admin'],
            tipo=Touchpoint.Tipo.FEEDBACK, feedback='Sem gestor'
        )

    def tearDown(self):
        reset_data_source()

    def _rows(self, user, **params):
        response = client_for(user).get('/hr/teams/touchpoints/', params)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return response.data['data']['results']

    def test_gestor_schedules_one_on_one_with_report(self):
        response = client_for(self.org['gestor']).post(
            '/hr/teams/touchpoints/one-on-one/',
            {'colaborador_id': self.org['colab'].pk, 'data_reuniao': '2024-05-02'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['tipo'], 'one_on_one')
        self.assertEqual(response.data['feedback'], 'Reunião 1:1 agendada')
        self.assertEqual(response.data['gestor_id'], self.org['gestor'].pk)
        self.assertEqual(response.data['data_reuniao'], '2024-05-02')

    def test_other_gestor_cannot_give_feedback(self):
        response = client_for(self.org['other_gestor']).post(
            '/hr/teams/touchpoints/feedback/',
            {'colaborador_id': self.org['colab'].pk, 'feedback': 'Intromissão'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Touchpoint.objects.filter(feedback='Intromissão').exists())

    def test_colaborador_cannot_record_touchpoints(self):
        response = client_for(self.org['colab']).post(
            '/hr/teams/touchpoints/feedback/',
            {'colaborador_id': self.org['outsider'].pk, 'feedback': 'Oi'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_performance_review_defaults_to_today(self):
        response = client_for(self.org['gestor']).post(
            '/hr/teams/touchpoints/performance-review/',
            {'colaborador_id': self.org['colab'].pk, 'feedback': 'Superou as metas do semestre'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        touchpoint = Touchpoint.objects.get(pk=response.data['id'])
        self.assertEqual(touchpoint.tipo, Touchpoint.Tipo.PERFORMANCE_REVIEW)
        self.assertIsNotNone(touchpoint.data_reuniao)

    def test_blank_feedback_rejected(self):
        response = client_for(self.org['gestor']).post(
            '/hr/teams/touchpoints/feedback/',
            {'colaborador_id': self.org['colab'].pk, 'feedback': '   '},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_touchpoint_with_self_rejected(self):
        response = client_for(self.org['admin']).post(
            '/hr/teams/touchpoints/feedback/',
            {'colaborador_id': self.org['admin'].pk, 'feedback': 'Eu mesmo'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_records_for_anyone(self):
        response = client_for(self.org['admin']).post(
            '/hr/teams/touchpoints/feedback/',
            {'colaborador_id': self.org['colab'].pk, 'feedback': 'Parabéns'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_write_while_degraded_returns_503(self):
        reset_data_source('degraded')
        response = client_for(self.org['gestor']).post(
            '/hr/teams/touchpoints/feedback/',
            {'colaborador_id': self.org['colab'].pk, 'feedback': 'Offline'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertFalse(Touchpoint.objects.filter(feedback='Offline').exists())

    def test_list_visibility(self):
        self.assertEqual([row['id'] for row in self._rows(self.org['colab'])], [self.feedback.pk])
        self.assertEqual([row['id'] for row in self._rows(self.org['gestor'])], [self.feedback.pk])
        self.assertEqual(self._rows(self.org['other_gestor']), [])
        self.assertEqual(self._rows(self.org['rh']), [])
        self.assertEqual(len(self._rows(self.org['admin'])), 2)

    def test_list_filter_by_tipo(self):
        self.assertEqual(self._rows(self.org['admin'], tipo='one_on_one'), [])

    def test_degraded_list_belongs_to_reader(self):
        reset_data_source('degraded')
        outsider = self.org['outsider']
        rows = self._rows(outsider)
        self.assertEqual(len(rows), 2)
        self.assertEqual({row['colaborador_id'] for row in rows}, {outsider.pk})
