"""
Tests for the data-source fallback controller.
"""
from django.db import DatabaseError, OperationalError
from django.test import SimpleTestCase, TestCase

from core.base.test_utils import make_user
from core.security.fallback import (
    DataSourceContext,
    DataSourceMode,
    MutationStatus,
    SourceUnavailable,
    get_sample_data,
    register_sample_data,
    registered_sample_classes,
)
from core.security.ownership import EntityClass
from HR.pdi.serializers import PDIObjectiveSerializer
from HR.teams.serializers import TeamSerializer


def failing_call():
    raise SourceUnavailable("network error")


class ReadFallbackTest(SimpleTestCase):

    def setUp(self):
        register_sample_data('widget', [{'id': 1, 'nome': 'Sample'}])
        self.data_source = DataSourceContext()

    def test_live_read_returns_live_result(self):
        rows = self.data_source.read(lambda: [{'id': 7, 'nome': 'Live'}], 'widget')
        self.assertEqual(rows, [{'id': 7, 'nome': 'Live'}])
        self.assertEqual(self.data_source.mode, DataSourceMode.LIVE)

    def test_failure_degrades_and_serves_sample(self):
        with self.assertLogs('core.security.fallback', level='WARNING'):
            rows = self.data_source.read(failing_call, 'widget')
        self.assertTrue(self.data_source.is_degraded)
        self.assertEqual(rows, [{'id': 1, 'nome': 'Sample'}])

    def test_next_three_reads_served_from_sample(self):
        self.data_source.read(failing_call, 'widget')
        live_calls = []

        def live_call():
            live_calls.append(1)
            return [{'id': 7, 'nome': 'Live'}]

        for _ in range(3):
            rows = self.data_source.read(live_call, 'widget')
            self.assertEqual(rows, [{'id': 1, 'nome': 'Sample'}])
        self.assertEqual(live_calls, [])

    def test_database_error_degrades(self):
        def broken():
            raise OperationalError("no such table")

        self.data_source.read(broken, 'widget')
        self.assertTrue(self.data_source.is_degraded)

    def test_degraded_is_sticky_until_explicit_toggle(self):
        self.data_source.read(failing_call, 'widget')
        self.data_source.read(lambda: [{'id': 1, 'nome': 'Sample'}], 'widget')
        self.assertTrue(self.data_source.is_degraded)

        self.data_source.toggle()
        self.assertEqual(self.data_source.mode, DataSourceMode.LIVE)
        self.assertEqual(self.data_source.read(lambda: [], 'widget'), [])

    def test_other_errors_propagate(self):
        def buggy():
            raise KeyError('nome')

        with self.assertRaises(KeyError):
            self.data_source.read(buggy, 'widget')
        self.assertFalse(self.data_source.is_degraded)

    def test_sample_rows_are_copies(self):
        self.data_source.set_mode(DataSourceMode.DEGRADED)
        rows = self.data_source.read(lambda: [], 'widget')
        rows[0]['nome'] = 'Changed'
        self.assertEqual(get_sample_data('widget')[0]['nome'], 'Sample')

    def test_unregistered_class_gives_empty_list(self):
        self.data_source.set_mode(DataSourceMode.DEGRADED)
        self.assertEqual(self.data_source.read(lambda: [1], 'nothing-registered'), [])


class ModeTest(SimpleTestCase):

    def test_initial_mode(self):
        self.assertFalse(DataSourceContext().is_degraded)
        self.assertTrue(DataSourceContext('degraded').is_degraded)

    def test_unknown_mode_rejected(self):
        with self.assertRaises(ValueError):
            DataSourceContext('offline')
        with self.assertRaises(ValueError):
            DataSourceContext().set_mode('offline')

    def test_toggle_flips_both_ways(self):
        data_source = DataSourceContext()
        self.assertEqual(data_source.toggle(), DataSourceMode.DEGRADED)
        self.assertEqual(data_source.toggle(), DataSourceMode.LIVE)

    def test_degrade_when_already_degraded_is_silent(self):
        data_source = DataSourceContext(DataSourceMode.DEGRADED)
        with self.assertNoLogs('core.security.fallback', level='WARNING'):
            data_source.degrade(SourceUnavailable('again'))
        self.assertTrue(data_source.is_degraded)


class WriteTest(TestCase):

    def setUp(self):
        self.data_source = DataSourceContext()

    def test_committed_write(self):
        result = self.data_source.write(lambda: make_user('w@pdi.test'))
        self.assertTrue(result.committed)
        self.assertEqual(result.value.email, 'w@pdi.test')

    def test_failed_write_rolls_back_and_degrades(self):
        def mutation():
            make_user('rollback@pdi.test')
            raise DatabaseError("connection lost")

        result = self.data_source.write(mutation)
        self.assertEqual(result.status, MutationStatus.FAILED)
        self.assertIn('connection lost', result.error)
        self.assertTrue(self.data_source.is_degraded)

        self.data_source.set_mode(DataSourceMode.LIVE)
        from django.contrib.auth import get_user_model
        self.assertFalse(get_user_model().objects.filter(email='rollback@pdi.test').exists())

    def test_write_while_degraded_fails_without_side_effects(self):
        self.data_source.set_mode(DataSourceMode.DEGRADED)
        calls = []
        result = self.data_source.write(lambda: calls.append(1))
        self.assertTrue(result.failed)
        self.assertEqual(calls, [])

    def test_validation_errors_propagate(self):
        from django.core.exceptions import ValidationError

        def mutation():
            raise ValidationError({'nome': 'required'})

        with self.assertRaises(ValidationError):
            self.data_source.write(mutation)
        self.assertFalse(self.data_source.is_degraded)


class SampleDataShapeTest(SimpleTestCase):
    """Sample rows carry exactly the keys the live serializers produce."""

    def assert_rows_match(self, key, serializer_class):
        rows = get_sample_data(key)
        self.assertTrue(rows, f"no sample data for {key}")
        expected = set(serializer_class.Meta.fields)
        for row in rows:
            self.assertEqual(set(row), expected, key)

    def test_every_domain_app_registers_samples(self):
        for key in (
            EntityClass.PDI_OBJECTIVE,
            EntityClass.PDI_COMMENT,
            EntityClass.ASSESSMENT,
            EntityClass.SALARY_RECORD,
            EntityClass.HR_RECORD,
            EntityClass.HR_TEST,
            EntityClass.TEAM,
            EntityClass.ACHIEVEMENT,
            EntityClass.TRACK_CONFIGURATION,
            EntityClass.TOUCHPOINT,
            EntityClass.ACTION_GROUP,
            EntityClass.ACTION_GROUP_TASK,
        ):
            self.assertIn(key, registered_sample_classes())

    def test_objective_and_team_shapes(self):
        self.assert_rows_match(EntityClass.PDI_OBJECTIVE, PDIObjectiveSerializer)
        self.assert_rows_match(EntityClass.TEAM, TeamSerializer)

    def test_remaining_shapes(self):
        from HR.assessment.serializers import AssessmentSerializer
        from HR.career.serializers import (
            CareerTrackSerializer,
            CompetencySerializer,
            SalaryHistorySerializer,
        )
        from HR.career.services import COMPETENCY_DATASET
        from HR.pdi.serializers import AchievementSerializer, PDICommentSerializer
        from HR.wellness.serializers import HRRecordSerializer, HRTestSerializer

        self.assert_rows_match(EntityClass.PDI_COMMENT, PDICommentSerializer)
        self.assert_rows_match(EntityClass.ACHIEVEMENT, AchievementSerializer)
        self.assert_rows_match(EntityClass.ASSESSMENT, AssessmentSerializer)
        self.assert_rows_match(EntityClass.SALARY_RECORD, SalaryHistorySerializer)
        self.assert_rows_match(EntityClass.TRACK_CONFIGURATION, CareerTrackSerializer)
        self.assert_rows_match(COMPETENCY_DATASET, CompetencySerializer)
        self.assert_rows_match(EntityClass.HR_RECORD, HRRecordSerializer)
        self.assert_rows_match(EntityClass.HR_TEST, HRTestSerializer)

    def test_touchpoint_and_action_group_shapes(self):
        from HR.action_groups.serializers import ActionGroupSerializer, ActionGroupTaskSerializer
        from HR.teams.serializers import TouchpointSerializer

        self.assert_rows_match(EntityClass.TOUCHPOINT, TouchpointSerializer)
        self.assert_rows_match(EntityClass.ACTION_GROUP, ActionGroupSerializer)
        self.assert_rows_match(EntityClass.ACTION_GROUP_TASK, ActionGroupTaskSerializer)
