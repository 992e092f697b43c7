"""
PDI objective service.

Owners maintain their objectives (content, progress, execution status).
Direct supervisors and admins evaluate them (approval status, extra points).
"""
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction

from core.security.ownership import EntityClass
from core.security.policy import filter_visible
from core.security.roles import Operation, Role
from core.security.services import AccessPolicyService
from HR.career.models import Competency
from HR.pdi.dtos import ObjectiveCreateDTO, ObjectiveEvaluationDTO, ObjectiveUpdateDTO
from HR.pdi.models import PDIObjective
from HR.pdi.services.achievement_service import AchievementService

logger = logging.getLogger(__name__)

User = get_user_model()

MENTOR_ROLES = (Role.GESTOR, Role.ADMIN)
EVALUATION_STATUSES = (
    PDIObjective.Status.APROVADO,
    PDIObjective.Status.REJEITADO,
    PDIObjective.Status.PROPOSTO_GESTOR,
)


def _resolve_mentor(mentor_id, colaborador):
    try:
        mentor = User.objects.active().get(pk=mentor_id)
    except User.DoesNotExist:
        raise ValidationError({'mentor_id': 'Mentor not found or inactive'})
    if mentor.role not in MENTOR_ROLES:
        raise ValidationError({'mentor_id': 'Mentor must be a gestor or admin'})
    if mentor.pk == colaborador.pk:
        raise ValidationError({'mentor_id': 'A user cannot mentor their own objective'})
    return mentor


def _resolve_competency(competency_id):
    try:
        return Competency.objects.get(pk=competency_id)
    except Competency.DoesNotExist:
        raise ValidationError({'competency_id': 'Competency not found'})


class ObjectiveService:
    """Service for PDI objective business logic"""

    @staticmethod
    def list_visible(data_source, actor, colaborador_id=None, objetivo_status=None):
        from HR.pdi.serializers import PDIObjectiveSerializer

        queryset = PDIObjective.objects.select_related('colaborador', 'mentor', 'competency')
        if colaborador_id:
            queryset = queryset.filter(colaborador_id=colaborador_id)
        if objetivo_status:
            queryset = queryset.filter(objetivo_status=objetivo_status)
        return AccessPolicyService.read_visible(
            data_source,
            actor,
            EntityClass.PDI_OBJECTIVE,
            queryset,
            lambda rows: PDIObjectiveSerializer(rows, many=True).data,
        )

    @staticmethod
    def get_visible(actor, pk) -> PDIObjective:
        """
        Return the objective if the actor may read it.

        Raises:
            PDIObjective.DoesNotExist: missing or not visible
        """
        candidates = PDIObjective.objects.visible_to(actor).select_related('colaborador').filter(pk=pk)
        visible = filter_visible(actor, candidates, EntityClass.PDI_OBJECTIVE)
        if not visible:
            raise PDIObjective.DoesNotExist(f"No visible objective with id {pk}")
        return visible[0]

    @staticmethod
    @transaction.atomic
    def create(actor, dto: ObjectiveCreateDTO) -> PDIObjective:
        """
        Create an objective for the actor, or for another user when the
        actor may write that user's objectives.
        """
        if dto.colaborador_id is None or str(dto.colaborador_id) == str(actor.pk):
            colaborador = actor
        else:
            try:
                colaborador = User.objects.active().get(pk=dto.colaborador_id)
            except User.DoesNotExist:
                raise ValidationError({'colaborador_id': 'User not found or inactive'})

        objective = PDIObjective(
            colaborador=colaborador,
            titulo=dto.titulo,
            descricao=dto.descricao or '',
            data_inicio=dto.data_inicio,
            data_fim=dto.data_fim,
            status=(
                PDIObjective.Status.PROPOSTO_COLABORADOR
                if colaborador.pk == actor.pk
                else PDIObjective.Status.PROPOSTO_GESTOR
            ),
            created_by=actor,
            updated_by=actor,
        )
        AccessPolicyService.enforce(actor, EntityClass.PDI_OBJECTIVE, objective, Operation.WRITE)

        if dto.competency_id is not None:
            objective.competency = _resolve_competency(dto.competency_id)
        if dto.mentor_id is not None:
            objective.mentor = _resolve_mentor(dto.mentor_id, colaborador)

        objective.full_clean()
        objective.save()
        return objective

    @staticmethod
    @transaction.atomic
    def update(actor, pk, dto: ObjectiveUpdateDTO) -> PDIObjective:
        """
        Update owner-maintained fields.

        Completing an objective sets progress to 100 and checks achievements.
        """
        objective = ObjectiveService.get_visible(actor, pk)
        AccessPolicyService.enforce(actor, EntityClass.PDI_OBJECTIVE, objective, Operation.WRITE)

        was_completed = objective.is_completed

        for field in ('titulo', 'descricao', 'data_inicio', 'data_fim', 'objetivo_status', 'progresso'):
            value = getattr(dto, field)
            if value is not None:
                setattr(objective, field, value)
        if dto.competency_id is not None:
            objective.competency = _resolve_competency(dto.competency_id)
        if dto.mentor_id is not None:
            objective.mentor = _resolve_mentor(dto.mentor_id, objective.colaborador)

        if objective.objetivo_status == PDIObjective.ObjetivoStatus.CONCLUIDO:
            objective.progresso = 100
        elif objective.progresso and objective.objetivo_status == PDIObjective.ObjetivoStatus.PENDENTE:
            objective.objetivo_status = PDIObjective.ObjetivoStatus.EM_ANDAMENTO

        objective.updated_by = actor
        objective.full_clean()
        objective.save()

        if objective.is_completed and not was_completed:
            AchievementService.check_and_unlock(objective.colaborador, objective)
        return objective

    @staticmethod
    @transaction.atomic
    def evaluate(actor, pk, dto: ObjectiveEvaluationDTO) -> PDIObjective:
        """Record the supervisor's approval decision and extra points."""
        objective = ObjectiveService.get_visible(actor, pk)
        AccessPolicyService.enforce(
            actor, EntityClass.PDI_OBJECTIVE, objective, Operation.EVALUATE,
            message="Only the direct supervisor or an administrator can evaluate this objective"
        )

        if dto.status is not None:
            if dto.status not in EVALUATION_STATUSES:
                raise ValidationError({'status': f'Invalid evaluation status: {dto.status}'})
            objective.status = dto.status
        if dto.pontos_extra is not None:
            objective.pontos_extra = dto.pontos_extra

        objective.updated_by = actor
        objective.full_clean()
        objective.save()
        logger.info("Objective %s evaluated by %s: status=%s", objective.pk, actor.pk, objective.status)
        return objective

    @staticmethod
    @transaction.atomic
    def delete(actor, pk):
        objective = ObjectiveService.get_visible(actor, pk)
        AccessPolicyService.enforce(actor, EntityClass.PDI_OBJECTIVE, objective, Operation.DELETE)
        objective.delete()

    @staticmethod
    def next_objective(actor):
        """The newest of the actor's own open objectives, or None."""
        return (
            PDIObjective.objects
            .filter(colaborador=actor)
            .open()
            .select_related('competency', 'mentor')
            .order_by('-created_at')
            .first()
        )

    @staticmethod
    def mentors():
        return User.objects.active().with_role(*MENTOR_ROLES).order_by('nome')
