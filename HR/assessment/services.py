"""
Assessment services.

Users rate their own competencies; the direct supervisor (or an admin)
rates the same competencies from the manager side. The report compares
both and places the user on the nine-box matrix (hard skills on the x
axis, soft skills on the y axis).
"""
import logging
from decimal import Decimal, InvalidOperation

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction

from core.security.ownership import EntityClass
from core.security.policy import same_actor
from core.security.roles import Operation
from core.security.fallback import get_sample_data
from core.security.services import AccessPolicyService, bind_sample_rows
from HR.assessment.dtos import ManagerAssessmentDTO, SelfAssessmentDTO
from HR.assessment.models import Assessment, current_cycle
from HR.career.models import Competency

logger = logging.getLogger(__name__)

User = get_user_model()

LOW_THRESHOLD = Decimal('3.33')
MEDIUM_THRESHOLD = Decimal('6.66')


def _resolve_competency(competency_id):
    try:
        return Competency.objects.get(pk=competency_id)
    except Competency.DoesNotExist:
        raise ValidationError({'competency_id': 'Competency not found'})


def _as_decimal(value):
    if value is None or value == '':
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def score_level(score):
    """Map a 0..10 score to baixo / medio / alto."""
    if score is None or score <= LOW_THRESHOLD:
        return 'baixo'
    if score <= MEDIUM_THRESHOLD:
        return 'medio'
    return 'alto'


def _average(values):
    values = [v for v in values if v is not None]
    if not values:
        return None
    return (sum(values) / len(values)).quantize(Decimal('0.01'))


def build_report(rows, user_id, ciclo=None):
    """
    Build the comparison report from serialized assessment rows.

    Works on plain dicts so live rows and sample rows go through the same
    code. For each competency the most recent self and manager scores are
    kept; the nine-box uses the manager score when there is one.
    """
    by_competency = {}
    for row in rows:
        if not same_actor(row.get('avaliado_id'), user_id):
            continue
        if ciclo and row.get('ciclo') != ciclo:
            continue
        key = row.get('competency_id')
        entry = by_competency.setdefault(key, {
            'competency_id': key,
            'nome': row.get('competency_nome'),
            'tipo': row.get('competency_tipo'),
            'self_score': None,
            'manager_score': None,
            '_self_at': '',
            '_manager_at': '',
        })
        stamp = str(row.get('updated_at') or '')
        nota = _as_decimal(row.get('nota'))
        if row.get('tipo') == Assessment.Tipo.AUTOAVALIACAO:
            if stamp >= entry['_self_at']:
                entry['self_score'], entry['_self_at'] = nota, stamp
        elif row.get('tipo') == Assessment.Tipo.GESTOR:
            if stamp >= entry['_manager_at']:
                entry['manager_score'], entry['_manager_at'] = nota, stamp

    competencies = []
    hard_scores, soft_scores = [], []
    for entry in sorted(by_competency.values(), key=lambda e: str(e['nome'] or '')):
        entry.pop('_self_at')
        entry.pop('_manager_at')
        self_score, manager_score = entry['self_score'], entry['manager_score']
        entry['divergence'] = (
            abs(self_score - manager_score)
            if self_score is not None and manager_score is not None
            else None
        )
        effective = manager_score if manager_score is not None else self_score
        if entry['tipo'] == 'hard':
            hard_scores.append(effective)
        elif entry['tipo'] == 'soft':
            soft_scores.append(effective)
        competencies.append(entry)

    hard_score = _average(hard_scores)
    soft_score = _average(soft_scores)
    hard_level = score_level(hard_score)
    soft_level = score_level(soft_score)
    return {
        'user_id': user_id,
        'ciclo': ciclo,
        'competencies': competencies,
        'nine_box': {
            'hard_score': hard_score,
            'soft_score': soft_score,
            'hard_level': hard_level,
            'soft_level': soft_level,
            'quadrant': f'{hard_level}-{soft_level}',
        },
    }


class AssessmentService:
    """Service for competency assessment business logic"""

    @staticmethod
    def list_visible(data_source, actor, avaliado_id=None, ciclo=None):
        from HR.assessment.serializers import AssessmentSerializer

        queryset = Assessment.objects.select_related('competency', 'avaliado')
        if avaliado_id:
            queryset = queryset.filter(avaliado_id=avaliado_id)
        if ciclo:
            queryset = queryset.for_cycle(ciclo)
        return AccessPolicyService.read_visible(
            data_source,
            actor,
            EntityClass.ASSESSMENT,
            queryset,
            lambda rows: AssessmentSerializer(rows, many=True).data,
        )

    @staticmethod
    @transaction.atomic
    def self_assess(actor, dto: SelfAssessmentDTO) -> Assessment:
        """Create or replace the actor's self-assessment for a competency in a cycle."""
        competency = _resolve_competency(dto.competency_id)
        ciclo = dto.ciclo or current_cycle()

        assessment = Assessment.objects.filter(
            competency=competency,
            avaliado=actor,
            tipo=Assessment.Tipo.AUTOAVALIACAO,
            ciclo=ciclo,
        ).first() or Assessment(
            competency=competency,
            avaliado=actor,
            tipo=Assessment.Tipo.AUTOAVALIACAO,
            ciclo=ciclo,
        )
        AccessPolicyService.enforce(actor, EntityClass.ASSESSMENT, assessment, Operation.WRITE)

        assessment.avaliador = actor
        assessment.nota = dto.nota
        assessment.comentario = dto.comentario or ''
        assessment.full_clean()
        assessment.save()
        return assessment

    @staticmethod
    @transaction.atomic
    def manager_assess(actor, dto: ManagerAssessmentDTO) -> Assessment:
        """
        Record the manager's score for a direct report.

        Validates:
        - Target user exists and is active
        - Actor is the target's direct supervisor, or an admin
        """
        try:
            avaliado = User.objects.active().get(pk=dto.avaliado_id)
        except User.DoesNotExist:
            raise ValidationError({'avaliado_id': 'User not found or inactive'})
        if avaliado.pk == actor.pk:
            raise ValidationError({'avaliado_id': 'Use the self-assessment for your own competencies'})

        competency = _resolve_competency(dto.competency_id)
        ciclo = dto.ciclo or current_cycle()

        assessment = Assessment.objects.filter(
            competency=competency,
            avaliado=avaliado,
            tipo=Assessment.Tipo.GESTOR,
            ciclo=ciclo,
        ).first() or Assessment(
            competency=competency,
            avaliado=avaliado,
            tipo=Assessment.Tipo.GESTOR,
            ciclo=ciclo,
        )
        AccessPolicyService.enforce(
            actor, EntityClass.ASSESSMENT, assessment, Operation.EVALUATE,
            message="Only the direct supervisor or an administrator can assess this user"
        )

        assessment.avaliador = actor
        assessment.nota = dto.nota
        assessment.comentario = dto.comentario or ''
        assessment.full_clean()
        assessment.save()
        logger.info("Manager assessment of user %s on competency %s by %s", avaliado.pk, competency.pk, actor.pk)
        return assessment

    @staticmethod
    def report(data_source, actor, user_id, ciclo=None):
        """
        Self vs manager comparison and nine-box position for ``user_id``.

        Raises:
            PermissionDenied: actor may not read the user's assessments
        """
        try:
            target = User.objects.get(pk=user_id)
        except User.DoesNotExist:
            raise ValidationError({'user_id': f'No user with id {user_id}'})

        AccessPolicyService.enforce(
            actor, EntityClass.ASSESSMENT, Assessment(avaliado=target), Operation.READ,
            message="You do not have permission to view this report"
        )
        rows = AssessmentService.list_visible(data_source, actor, avaliado_id=target.pk, ciclo=ciclo)
        if data_source.is_degraded:
            # the sample cycle describes whoever the report is about
            rows = bind_sample_rows(
                get_sample_data(EntityClass.ASSESSMENT), EntityClass.ASSESSMENT, target.pk, target.nome
            )
        return build_report(rows, target.pk, ciclo=ciclo)
