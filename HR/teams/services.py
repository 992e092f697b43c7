"""
Team services.

Anyone active may list teams. The leader (team owner) and admins may edit
a team and its membership; only admins may dissolve one.

Touchpoints (one-on-ones, feedback, performance reviews) are recorded by a
gestor about a direct report and read by that report.
"""
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.utils import timezone

from core.security.masking import mask
from core.security.ownership import EntityClass
from core.security.roles import Operation, Role
from core.security.services import AccessPolicyService
from HR.teams.dtos import (
    FeedbackDTO,
    OneOnOneDTO,
    PerformanceReviewDTO,
    TeamCreateDTO,
    TeamUpdateDTO,
)
from HR.teams.models import Team, Touchpoint

logger = logging.getLogger(__name__)

User = get_user_model()

LEADER_ROLES = (Role.GESTOR, Role.ADMIN)


def _get_active_user(user_id, field):
    try:
        return User.objects.active().get(pk=user_id)
    except User.DoesNotExist:
        raise ValidationError({field: f'No active user with id {user_id}'})


def _ensure_can_move(actor, member, team):
    """
    Moving someone out of another team needs write access on that team too,
    and only admins may place an admin.

    Raises:
        PermissionDenied
    """
    if member.role == Role.ADMIN and actor.role != Role.ADMIN:
        raise PermissionDenied("Only administrators can assign an administrator to a team")
    if member.time_id and member.time_id != team.pk:
        AccessPolicyService.enforce(
            actor, EntityClass.TEAM, member.time, Operation.WRITE,
            message=f"User {member.pk} belongs to a team you do not lead"
        )
        logger.info("User %s moves from team %s to team %s", member.pk, member.time_id, team.pk)


class TeamService:
    """Service for team business logic"""

    @staticmethod
    def list_teams(data_source, actor, query_params=None):
        from HR.teams.serializers import TeamSerializer

        rows = data_source.read(
            lambda: TeamSerializer(
                Team.objects.active()
                .filter_by_search_params(query_params or {})
                .select_related('leader')
                .prefetch_related('membros'),
                many=True
            ).data,
            EntityClass.TEAM,
        )
        return mask(rows, actor, EntityClass.TEAM)

    @staticmethod
    def get(team_id) -> Team:
        try:
            return Team.objects.active().get(pk=team_id)
        except Team.DoesNotExist:
            raise ValidationError(f"No active team with id {team_id}")

    @staticmethod
    @transaction.atomic
    def create(actor, dto: TeamCreateDTO) -> Team:
        """
        Create a team. The creator leads it unless another leader is given.

        Validates:
        - Leader is an active gestor or admin
        - Members exist and are active
        """
        leader = actor if dto.leader_id is None else _get_active_user(dto.leader_id, 'leader_id')
        if leader.role not in LEADER_ROLES:
            raise ValidationError({'leader_id': 'Team leader must be a gestor or admin'})

        team = Team(
            nome=dto.nome,
            descricao=dto.descricao or '',
            leader=leader,
            created_by=actor,
            updated_by=actor,
        )
        team.full_clean()
        team.save()

        for member_id in dto.member_ids:
            member = _get_active_user(member_id, 'member_ids')
            _ensure_can_move(actor, member, team)
            member.time = team
            member.save(update_fields=['time', 'updated_at'])
        return team

    @staticmethod
    @transaction.atomic
    def update(actor, team_id, dto: TeamUpdateDTO) -> Team:
        team = TeamService.get(team_id)
        AccessPolicyService.enforce(actor, EntityClass.TEAM, team, Operation.WRITE)

        field_updates = {}
        if dto.nome is not None:
            field_updates['nome'] = dto.nome
        if dto.descricao is not None:
            field_updates['descricao'] = dto.descricao
        if dto.leader_id is not None:
            leader = _get_active_user(dto.leader_id, 'leader_id')
            if leader.role not in LEADER_ROLES:
                raise ValidationError({'leader_id': 'Team leader must be a gestor or admin'})
            field_updates['leader'] = leader

        if field_updates:
            field_updates['updated_by'] = actor
            team.update_fields(field_updates)
        return team

    @staticmethod
    @transaction.atomic
    def deactivate(actor, team_id) -> Team:
        """Dissolve a team; its members are left without a team."""
        team = TeamService.get(team_id)
        AccessPolicyService.enforce(
            actor, EntityClass.TEAM, team, Operation.DELETE,
            message="Only administrators can dissolve teams"
        )
        team.membros.update(time=None)
        team.deactivate()
        logger.info("Team %s dissolved by %s", team.pk, actor.pk)
        return team

    @staticmethod
    @transaction.atomic
    def add_member(actor, team_id, user_id) -> Team:
        """
        Move a user into the team. A previous team membership is replaced,
        which needs write access on the previous team as well.
        """
        team = TeamService.get(team_id)
        AccessPolicyService.enforce(actor, EntityClass.TEAM, team, Operation.WRITE)

        member = _get_active_user(user_id, 'user_id')
        _ensure_can_move(actor, member, team)
        member.time = team
        member.save(update_fields=['time', 'updated_at'])
        return team

    @staticmethod
    @transaction.atomic
    def remove_member(actor, team_id, user_id) -> Team:
        team = TeamService.get(team_id)
        AccessPolicyService.enforce(actor, EntityClass.TEAM, team, Operation.WRITE)

        try:
            member = team.membros.get(pk=user_id)
        except User.DoesNotExist:
            raise ValidationError({'user_id': f'User {user_id} is not a member of this team'})
        member.time = None
        member.save(update_fields=['time', 'updated_at'])
        return team


class TouchpointService:
    """Service for manager touchpoints with direct reports"""

    ONE_ON_ONE_NOTE = 'Reunião 1:1 agendada'

    @staticmethod
    def list_visible(data_source, actor, colaborador_id=None, tipo=None):
        from HR.teams.serializers import TouchpointSerializer

        queryset = Touchpoint.objects.select_related('colaborador', 'gestor')
        if colaborador_id:
            queryset = queryset.for_colaborador(colaborador_id)
        if tipo:
            queryset = queryset.filter(tipo=tipo)
        return AccessPolicyService.read_visible(
            data_source,
            actor,
            EntityClass.TOUCHPOINT,
            queryset,
            lambda rows: TouchpointSerializer(rows, many=True).data,
        )

    @staticmethod
    def _record(actor, colaborador_id, tipo, feedback, data_reuniao) -> Touchpoint:
        """
        Validates:
        - The colaborador exists, is active and is not the actor
        - The actor directly supervises the colaborador (or is an admin)
        """
        colaborador = _get_active_user(colaborador_id, 'colaborador_id')
        if colaborador.pk == actor.pk:
            raise ValidationError({'colaborador_id': 'You cannot record a touchpoint with yourself'})

        touchpoint = Touchpoint(
            colaborador=colaborador,
            gestor=actor,
            tipo=tipo,
            feedback=feedback,
            data_reuniao=data_reuniao,
        )
        AccessPolicyService.enforce(
            actor, EntityClass.TOUCHPOINT, touchpoint, Operation.EVALUATE,
            message="Only the direct supervisor can record touchpoints for this user"
        )
        touchpoint.full_clean()
        touchpoint.save()
        logger.info("%s touchpoint for user %s recorded by %s", tipo, colaborador.pk, actor.pk)
        return touchpoint

    @staticmethod
    @transaction.atomic
    def schedule_one_on_one(actor, dto: OneOnOneDTO) -> Touchpoint:
        return TouchpointService._record(
            actor, dto.colaborador_id, Touchpoint.Tipo.ONE_ON_ONE,
            TouchpointService.ONE_ON_ONE_NOTE, dto.data_reuniao,
        )

    @staticmethod
    @transaction.atomic
    def give_feedback(actor, dto: FeedbackDTO) -> Touchpoint:
        if not dto.feedback or not dto.feedback.strip():
            raise ValidationError({'feedback': 'Feedback cannot be empty'})
        return TouchpointService._record(
            actor, dto.colaborador_id, Touchpoint.Tipo.FEEDBACK, dto.feedback.strip(), None,
        )

    @staticmethod
    @transaction.atomic
    def performance_review(actor, dto: PerformanceReviewDTO) -> Touchpoint:
        """Record a performance review. The meeting date defaults to today."""
        if not dto.feedback or not dto.feedback.strip():
            raise ValidationError({'feedback': 'Review feedback cannot be empty'})
        return TouchpointService._record(
            actor, dto.colaborador_id, Touchpoint.Tipo.PERFORMANCE_REVIEW,
            dto.feedback.strip(), dto.data_reuniao or timezone.localdate(),
        )
