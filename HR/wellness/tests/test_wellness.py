"""
Tests for confidential HR records and wellbeing tests.
"""
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from core.base.test_utils import client_for, make_org, reset_data_source
from HR.wellness.models import HRRecord, HRTest
from HR.wellness.services import interpret_score, score_answers

BASE = '/hr/wellness'


class ScoringTest(SimpleTestCase):

    def test_interpretation_bands(self):
        self.assertEqual(interpret_score(Decimal('0')), 'Baixo risco')
        self.assertEqual(interpret_score(Decimal('3.0')), 'Baixo risco')
        self.assertEqual(interpret_score(Decimal('3.1')), 'Atenção necessária')
        self.assertEqual(interpret_score(Decimal('6.0')), 'Atenção necessária')
        self.assertEqual(interpret_score(Decimal('6.1')), 'Alto risco')

    def test_average_rounds_half_up(self):
        self.assertEqual(score_answers({'q1': 2, 'q2': 5}), Decimal('3.5'))
        self.assertEqual(score_answers({'q1': 1, 'q2': 2, 'q3': 2}), Decimal('1.7'))

    def test_non_numeric_answers_are_skipped(self):
        self.assertEqual(score_answers({'q1': 8, 'obs': 'cansado', 'ok': True}), Decimal('8.0'))

    def test_out_of_range_answer(self):
        with self.assertRaises(ValidationError):
            score_answers({'q1': 11})

    def test_non_finite_answers_are_skipped(self):
        for text in ('nan', 'NaN', 'sNaN', 'Infinity', '-Infinity'):
            with self.subTest(answer=text):
                self.assertEqual(score_answers({'q1': text, 'q2': 3}), Decimal('3.0'))

    def test_only_non_finite_answers(self):
        with self.assertRaises(ValidationError):
            score_answers({'q1': 'nan', 'q2': 'Infinity'})

    def test_no_numeric_answers(self):
        with self.assertRaises(ValidationError):
            score_answers({'obs': 'nada'})


@override_settings(PDI_CONFIDENTIAL_PLACEHOLDER='Paciente Confidencial')
class HRRecordAPITest(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.org = make_org()
        cls.record = HRRecord.objects.create(
            user=cls.org['colab'], titulo='Sessão inicial', created_by=cls.org['rh']
        )

    def tearDown(self):
        reset_data_source()

    def _rows(self, user):
        response = client_for(user).get(f'{BASE}/records/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return response.data['data']['results']

    def test_rh_sees_subject_name(self):
        row, = self._rows(self.org['rh'])
        self.assertEqual(row['user_nome'], 'Carla Colab')
        self.assertFalse(row['confidential'])

    def test_subject_sees_own_record(self):
        row, = self._rows(self.org['colab'])
        self.assertEqual(row['user_id'], self.org['colab'].pk)
        self.assertFalse(row['confidential'])

    def test_admin_sees_masked_record(self):
        row, = self._rows(self.org['admin'])
        self.assertEqual(row['user_nome'], 'Paciente Confidencial')
        self.assertIsNone(row['user_id'])
        self.assertTrue(row['confidential'])
        self.assertEqual(row['titulo'], 'Sessão inicial')

    def test_supervisor_sees_nothing(self):
        self.assertEqual(self._rows(self.org['gestor']), [])

    def test_rh_creates_record(self):
        response = client_for(self.org['rh']).post(
            f'{BASE}/records/create/',
            {'user_id': self.org['outsider'].pk, 'titulo': 'Acompanhamento', 'tipo': 'acompanhamento'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user_nome'], 'Otto Outsider')
        self.assertEqual(HRRecord.objects.get(pk=response.data['id']).created_by, self.org['rh'])

    def test_colaborador_cannot_create_record(self):
        response = client_for(self.org['colab']).post(
            f'{BASE}/records/create/', {'user_id': self.org['colab'].pk, 'titulo': 'X'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_while_degraded_returns_503(self):
        reset_data_source('degraded')
        response = client_for(self.org['rh']).post(
            f'{BASE}/records/create/', {'user_id': self.org['colab'].pk, 'titulo': 'Offline'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertFalse(HRRecord.objects.filter(titulo='Offline').exists())

    def test_detail_hidden_from_unrelated_user(self):
        response = client_for(self.org['outsider']).get(f'{BASE}/records/{self.record.pk}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_subject_cannot_edit_record(self):
        response = client_for(self.org['colab']).patch(
            f'{BASE}/records/{self.record.pk}/', {'titulo': 'Editado'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_rh_edits_and_deletes_record(self):
        client = client_for(self.org['rh'])
        response = client.patch(f'{BASE}/records/{self.record.pk}/', {'conteudo': 'Notas'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['conteudo'], 'Notas')

        response = client.delete(f'{BASE}/records/{self.record.pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(HRRecord.objects.filter(pk=self.record.pk).exists())

    def test_degraded_listing_serves_sample_rows(self):
        reset_data_source('degraded')
        rows = self._rows(self.org['rh'])
        self.assertTrue(rows)
        self.assertFalse(any(row['confidential'] for row in rows))
        self.assertEqual(rows[0]['user_nome'], 'João Silva')

    def test_degraded_sample_rows_belong_to_reader(self):
        reset_data_source('degraded')
        colab = self.org['colab']
        row, = self._rows(colab)
        self.assertEqual(row['user_id'], colab.pk)
        self.assertEqual(row['user_nome'], 'Carla Colab')
        self.assertFalse(row['confidential'])

    def test_degraded_admin_sees_sample_rows_masked(self):
        reset_data_source('degraded')
        row, = self._rows(self.org['admin'])
        self.assertEqual(row['user_nome'], 'Paciente Confidencial')
        self.assertIsNone(row['user_id'])
        self.assertTrue(row['confidential'])


class HRTestAPITest(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.org = make_org()

    def _assign(self, user=None):
        return client_for(self.org['rh']).post(
            f'{BASE}/tests/',
            {
                'user_id': (user or self.org['colab']).pk,
                'test_type': HRTest.TestType.BURNOUT,
                'questions': {'q1': 'Sinto-me esgotado', 'q2': 'Durmo bem'},
            },
            format='json'
        )

    def test_rh_assigns_test(self):
        response = self._assign()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['administered_by_id'], self.org['rh'].pk)
        self.assertIsNone(response.data['completed_at'])

    def test_colaborador_cannot_assign(self):
        response = client_for(self.org['colab']).post(
            f'{BASE}/tests/',
            {'user_id': self.org['colab'].pk, 'test_type': HRTest.TestType.STRESS},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_subject_completes_test_once(self):
        test_id = self._assign().data['id']
        client = client_for(self.org['colab'])

        response = client.post(f'{BASE}/tests/{test_id}/complete/', {'answers': {'q1': 2, 'q2': 5}}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        test = HRTest.objects.get(pk=test_id)
        self.assertEqual(test.score, Decimal('3.5'))
        self.assertEqual(test.interpretation, 'Atenção necessária')
        self.assertTrue(test.is_completed)

        response = client.post(f'{BASE}/tests/{test_id}/complete/', {'answers': {'q1': 1}}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unrelated_user_cannot_complete(self):
        test_id = self._assign().data['id']
        response = client_for(self.org['gestor']).post(
            f'{BASE}/tests/{test_id}/complete/', {'answers': {'q1': 1}}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_empty_answers_rejected(self):
        test_id = self._assign().data['id']
        response = client_for(self.org['colab']).post(
            f'{BASE}/tests/{test_id}/complete/', {'answers': {}}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_finite_answers_rejected(self):
        test_id = self._assign().data['id']
        response = client_for(self.org['colab']).post(
            f'{BASE}/tests/{test_id}/complete/', {'answers': {'q1': 'nan', 'q2': 'sNaN'}}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(HRTest.objects.get(pk=test_id).is_completed)

    def test_non_finite_answer_ignored_in_score(self):
        test_id = self._assign().data['id']
        response = client_for(self.org['colab']).post(
            f'{BASE}/tests/{test_id}/complete/', {'answers': {'q1': 'Infinity', 'q2': 4}}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(HRTest.objects.get(pk=test_id).score, Decimal('4.0'))

    def test_pending_filter(self):
        first = self._assign().data['id']
        self._assign()
        client_for(self.org['colab']).post(f'{BASE}/tests/{first}/complete/', {'answers': {'q1': 9}}, format='json')

        response = client_for(self.org['colab']).get(f'{BASE}/tests/', {'pending': 'true'})
        self.assertEqual(len(response.data['data']['results']), 1)

        response = client_for(self.org['colab']).get(f'{BASE}/tests/')
        self.assertEqual(len(response.data['data']['results']), 2)
