"""
HR wellness services: confidential session records and wellbeing tests.

Records are written by rh (or an admin). Listings always pass through the
masking layer, so anyone who is neither rh nor the subject sees the
placeholder instead of the subject's name.
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.utils import timezone

from core.security.masking import mask
from core.security.ownership import EntityClass
from core.security.policy import filter_visible
from core.security.roles import Operation, Role
from core.security.services import AccessPolicyService
from HR.wellness.dtos import HRRecordCreateDTO, HRRecordUpdateDTO, HRTestCompleteDTO, HRTestCreateDTO
from HR.wellness.models import HRRecord, HRTest

logger = logging.getLogger(__name__)

User = get_user_model()

HR_STAFF_ROLES = (Role.RH, Role.ADMIN)

INTERPRETATION_BANDS = (
    (Decimal('3'), 'Baixo risco'),
    (Decimal('6'), 'Atenção necessária'),
)
HIGH_RISK = 'Alto risco'


def interpret_score(score):
    """Map a 0..10 wellbeing score to its risk band."""
    for upper, label in INTERPRETATION_BANDS:
        if score <= upper:
            return label
    return HIGH_RISK


def score_answers(answers):
    """
    Average the numeric answers (each 0..10), rounded to one decimal.

    Raises:
        ValidationError: no numeric answers, or an answer out of range
    """
    values = []
    for key, value in answers.items():
        if isinstance(value, bool):
            continue
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            continue
        if not number.is_finite():
            continue
        if number < 0 or number > 10:
            raise ValidationError({'answers': f'Answer {key} must be between 0 and 10'})
        values.append(number)
    if not values:
        raise ValidationError({'answers': 'No numeric answers to score'})
    return (sum(values) / len(values)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)


def _require_hr_staff(actor, action):
    if actor.role not in HR_STAFF_ROLES:
        logger.info("User %s (%s) tried to %s", actor.pk, actor.role, action)
        raise PermissionDenied(f"Only HR staff can {action}")


def _get_subject(user_id):
    try:
        return User.objects.active().get(pk=user_id)
    except User.DoesNotExist:
        raise ValidationError({'user_id': 'User not found or inactive'})


class HRRecordService:
    """Service for HR session records"""

    @staticmethod
    def list_visible(data_source, actor, user_id=None):
        from HR.wellness.serializers import HRRecordSerializer

        queryset = HRRecord.objects.select_related('user')
        if user_id:
            queryset = queryset.filter(user_id=user_id)
        return AccessPolicyService.read_visible(
            data_source,
            actor,
            EntityClass.HR_RECORD,
            queryset,
            lambda rows: HRRecordSerializer(rows, many=True).data,
        )

    @staticmethod
    def get_visible(actor, pk) -> HRRecord:
        candidates = HRRecord.objects.visible_to(actor).select_related('user').filter(pk=pk)
        visible = filter_visible(actor, candidates, EntityClass.HR_RECORD)
        if not visible:
            raise HRRecord.DoesNotExist(f"No visible HR record with id {pk}")
        return visible[0]

    @staticmethod
    def masked(actor, record):
        """Serialize one record through the masking layer."""
        from HR.wellness.serializers import HRRecordSerializer
        return mask([HRRecordSerializer(record).data], actor, EntityClass.HR_RECORD)[0]

    @staticmethod
    @transaction.atomic
    def create(actor, dto: HRRecordCreateDTO) -> HRRecord:
        _require_hr_staff(actor, 'create HR records')
        record = HRRecord(
            user=_get_subject(dto.user_id),
            titulo=dto.titulo,
            tipo=dto.tipo or HRRecord.Tipo.SESSAO,
            conteudo=dto.conteudo or '',
            data_sessao=dto.data_sessao,
            created_by=actor,
            updated_by=actor,
        )
        if dto.sensitivity:
            record.sensitivity = dto.sensitivity
        AccessPolicyService.enforce(actor, EntityClass.HR_RECORD, record, Operation.WRITE)
        record.full_clean()
        record.save()
        return record

    @staticmethod
    @transaction.atomic
    def update(actor, pk, dto: HRRecordUpdateDTO) -> HRRecord:
        record = HRRecordService.get_visible(actor, pk)
        _require_hr_staff(actor, 'edit HR records')
        AccessPolicyService.enforce(actor, EntityClass.HR_RECORD, record, Operation.WRITE)

        changes = {
            name: getattr(dto, name)
            for name in ('titulo', 'tipo', 'conteudo', 'data_sessao', 'sensitivity')
            if getattr(dto, name) is not None
        }
        for name, value in changes.items():
            setattr(record, name, value)
        record.updated_by = actor
        record.full_clean()
        record.save()
        return record

    @staticmethod
    @transaction.atomic
    def delete(actor, pk):
        record = HRRecordService.get_visible(actor, pk)
        AccessPolicyService.enforce(actor, EntityClass.HR_RECORD, record, Operation.DELETE)
        record.delete()
        logger.info("HR record %s deleted by %s", pk, actor.pk)


class HRTestService:
    """Service for wellbeing tests"""

    @staticmethod
    def list_visible(data_source, actor, user_id=None, pending=False):
        from HR.wellness.serializers import HRTestSerializer

        queryset = HRTest.objects.select_related('user')
        if user_id:
            queryset = queryset.filter(user_id=user_id)
        if pending:
            queryset = queryset.pending()
        return AccessPolicyService.read_visible(
            data_source,
            actor,
            EntityClass.HR_TEST,
            queryset,
            lambda rows: HRTestSerializer(rows, many=True).data,
        )

    @staticmethod
    def masked(actor, test):
        from HR.wellness.serializers import HRTestSerializer
        return mask([HRTestSerializer(test).data], actor, EntityClass.HR_TEST)[0]

    @staticmethod
    @transaction.atomic
    def create(actor, dto: HRTestCreateDTO) -> HRTest:
        """Assign a test to a user."""
        _require_hr_staff(actor, 'assign tests')
        test = HRTest(
            user=_get_subject(dto.user_id),
            administered_by=actor,
            test_type=dto.test_type,
            questions=dto.questions or {},
        )
        AccessPolicyService.enforce(actor, EntityClass.HR_TEST, test, Operation.WRITE)
        test.full_clean()
        test.save()
        return test

    @staticmethod
    @transaction.atomic
    def complete(actor, pk, dto: HRTestCompleteDTO) -> HRTest:
        """
        Record the answers, score them and store the interpretation.

        The subject answers their own test; rh may enter answers for them.
        """
        candidates = HRTest.objects.visible_to(actor, Operation.WRITE).select_related('user').filter(pk=pk)
        visible = filter_visible(actor, candidates, EntityClass.HR_TEST, Operation.WRITE)
        if not visible:
            raise HRTest.DoesNotExist(f"No HR test with id {pk}")
        test = visible[0]
        AccessPolicyService.enforce(actor, EntityClass.HR_TEST, test, Operation.WRITE)

        if test.is_completed:
            raise ValidationError({'completed_at': 'This test has already been completed'})

        test.answers = dto.answers
        test.score = score_answers(dto.answers)
        test.interpretation = interpret_score(test.score)
        test.completed_at = timezone.now()
        test.full_clean()
        test.save()
        logger.info("HR test %s completed (%s)", test.pk, test.interpretation)
        return test
