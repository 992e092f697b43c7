"""
Tests for career tracks, competencies and salary history.
"""
from datetime import date
from decimal import Decimal

from django.core.exceptions import PermissionDenied, ValidationError
from rest_framework import status
from rest_framework.test import APITestCase

from core.base.test_utils import client_for, make_org, reset_data_source
from core.security.fallback import DataSourceContext, DataSourceMode
from HR.career.dtos import CareerStageDTO, CareerTrackCreateDTO, SalaryRecordCreateDTO
from HR.career.models import CareerStage, CareerTrack, Competency, SalaryHistory
from HR.career.services import CareerTrackService, CompetencyService, SalaryHistoryService


class CareerTrackServiceTest(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.org = make_org()

    def dto(self, nome='Backend', stages=None):
        return CareerTrackCreateDTO(
            nome=nome,
            descricao='Trilha backend',
            stages=stages if stages is not None else [
                CareerStageDTO(titulo='Júnior', ordem=1),
                CareerStageDTO(titulo='Especialista', ordem=2, fase='especializacao', is_final=True),
            ],
        )

    def test_admin_creates_track_with_stages(self):
        track = CareerTrackService.create(self.org['admin'], self.dto())
        self.assertEqual(track.stages.count(), 2)
        self.assertEqual(track.created_by, self.org['admin'])

    def test_non_admin_cannot_configure(self):
        for key in ('gestor', 'rh', 'colab'):
            with self.assertRaises(PermissionDenied):
                CareerTrackService.create(self.org[key], self.dto(nome=f'Track {key}'))
        self.assertFalse(CareerTrack.objects.exists())

    def test_duplicate_name_rejected(self):
        CareerTrackService.create(self.org['admin'], self.dto())
        with self.assertRaises(ValidationError):
            CareerTrackService.create(self.org['admin'], self.dto(nome='backend'))

    def test_single_final_stage(self):
        stages = [
            CareerStageDTO(titulo='A', ordem=1, is_final=True),
            CareerStageDTO(titulo='B', ordem=2, is_final=True),
        ]
        with self.assertRaises(ValidationError):
            CareerTrackService.create(self.org['admin'], self.dto(stages=stages))

    def test_cannot_deactivate_followed_track(self):
        track = CareerTrackService.create(self.org['admin'], self.dto())
        colab = self.org['colab']
        colab.trilha = track
        colab.save()
        with self.assertRaises(ValidationError):
            CareerTrackService.deactivate(self.org['admin'], track.pk)

        colab.deactivate()
        CareerTrackService.deactivate(self.org['admin'], track.pk)
        self.assertFalse(CareerTrack.objects.active().filter(pk=track.pk).exists())

    def test_list_tracks_degraded_returns_sample(self):
        rows = CareerTrackService.list_tracks(DataSourceContext(DataSourceMode.DEGRADED))
        self.assertEqual(rows[0]['nome'], 'Desenvolvimento Backend')


class CareerAPITest(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.org = make_org()
        cls.track = CareerTrack.objects.create(nome='Dados', created_by=cls.org['admin'])
        cls.stage = CareerStage.objects.create(trilha=cls.track, titulo='Analista', ordem=1)
        Competency.objects.create(nome='SQL', tipo='hard', stage=cls.stage)
        Competency.objects.create(nome='Empatia', tipo='soft')

    def tearDown(self):
        reset_data_source()

    def test_everyone_reads_reference_data(self):
        response = client_for(self.org['colab']).get('/hr/career/tracks/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['nome'] for row in response.data['data']['results']], ['Dados'])

    def test_filter_competencies(self):
        response = client_for(self.org['colab']).get('/hr/career/competencies/', {'tipo': 'soft'})
        self.assertEqual([row['nome'] for row in response.data['data']['results']], ['Empatia'])

    def test_admin_creates_track_via_api(self):
        payload = {
            'nome': 'Frontend',
            'stages': [{'titulo': 'Júnior', 'ordem': 1}, {'titulo': 'Pleno', 'ordem': 2}],
        }
        response = client_for(self.org['admin']).post('/hr/career/tracks/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data['stages']), 2)

    def test_duplicate_stage_order_rejected(self):
        payload = {'nome': 'Mobile', 'stages': [{'titulo': 'A', 'ordem': 1}, {'titulo': 'B', 'ordem': 1}]}
        response = client_for(self.org['admin']).post('/hr/career/tracks/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_gestor_cannot_create_competency(self):
        response = client_for(self.org['gestor']).post(
            '/hr/career/competencies/', {'nome': 'Go', 'tipo': 'hard'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_creates_competency(self):
        response = client_for(self.org['admin']).post(
            '/hr/career/competencies/', {'nome': 'Go', 'tipo': 'hard', 'stage_id': self.stage.pk}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['stage_titulo'], 'Analista')

    def test_track_update_and_delete_admin_only(self):
        url = f'/hr/career/tracks/{self.track.pk}/'
        response = client_for(self.org['gestor']).patch(url, {'descricao': 'x'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = client_for(self.org['admin']).patch(url, {'descricao': 'Trilha de dados'}, format='json')
        self.assertEqual(response.data['descricao'], 'Trilha de dados')

        response = client_for(self.org['admin']).delete(url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)


class SalaryHistoryTest(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.org = make_org()
        cls.record = SalaryHistory.objects.create(
            user=cls.org['colab'], cargo='Dev Jr', valor=Decimal('4000.00'), data_inicio=date(2023, 1, 1)
        )

    def test_owner_reads_own_history(self):
        response = client_for(self.org['colab']).get('/hr/career/salary-history/')
        rows = response.data['data']['results']
        self.assertEqual([row['id'] for row in rows], [self.record.pk])

    def test_supervisor_cannot_read_salary(self):
        response = client_for(self.org['gestor']).get(
            '/hr/career/salary-history/', {'user_id': self.org['colab'].pk}
        )
        self.assertEqual(response.data['data']['results'], [])

    def test_owner_cannot_write_salary(self):
        dto = SalaryRecordCreateDTO(user_id=self.org['colab'].pk, valor=Decimal('9999'), data_inicio=date(2024, 1, 1))
        with self.assertRaises(PermissionDenied):
            SalaryHistoryService.create(self.org['colab'], dto)

    def test_admin_record_closes_open_one(self):
        response = client_for(self.org['admin']).post('/hr/career/salary-history/', {
            'user_id': self.org['colab'].pk,
            'valor': '5000.00',
            'data_inicio': '2024-01-01',
            'cargo': 'Dev Pleno',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.record.refresh_from_db()
        self.assertEqual(self.record.data_fim, date(2024, 1, 1))

    def test_competency_list_degraded(self):
        rows = CompetencyService.list_competencies(DataSourceContext(DataSourceMode.DEGRADED))
        self.assertEqual({row['tipo'] for row in rows}, {'hard', 'soft'})
