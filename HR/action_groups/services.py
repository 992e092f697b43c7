"""
Action group services.

A group is visible to its creator and its members. The creator (or an
admin) edits the group, manages its members and plans its tasks; any
participant may move a task across the board.
"""
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction

from core.security.fallback import get_sample_data
from core.security.masking import mask
from core.security.ownership import EntityClass
from core.security.policy import filter_visible, same_actor
from core.security.roles import Operation
from core.security.services import AccessPolicyService, bind_sample_rows_to_actor
from HR.action_groups.dtos import (
    ActionGroupCreateDTO,
    ActionGroupUpdateDTO,
    TaskCreateDTO,
    TaskUpdateDTO,
)
from HR.action_groups.models import ActionGroup, ActionGroupMember, ActionGroupTask

logger = logging.getLogger(__name__)

User = get_user_model()


def _get_active_user(user_id, field):
    try:
        return User.objects.active().get(pk=user_id)
    except User.DoesNotExist:
        raise ValidationError({field: f'No active user with id {user_id}'})


def _is_participant(group, user_id):
    return same_actor(group.created_by_id, user_id) or group.memberships.filter(user_id=user_id).exists()


def _ensure_open(group):
    if group.status == ActionGroup.Status.ARCHIVED:
        raise ValidationError('Archived groups are read-only')


class ActionGroupService:
    """Service for action groups and their membership"""

    @staticmethod
    def list_visible(data_source, actor, status=None):
        from HR.action_groups.serializers import ActionGroupSerializer

        queryset = ActionGroup.objects.select_related('created_by').prefetch_related('memberships', 'tasks')
        if status:
            queryset = queryset.with_status(status)
        return AccessPolicyService.read_visible(
            data_source,
            actor,
            EntityClass.ACTION_GROUP,
            queryset,
            lambda rows: ActionGroupSerializer(rows, many=True).data,
        )

    @staticmethod
    def get_visible(actor, pk) -> ActionGroup:
        """
        Return the group if the actor created it, belongs to it or is an admin.

        Raises:
            ActionGroup.DoesNotExist: missing or not visible
        """
        candidates = ActionGroup.objects.visible_to(actor).select_related('created_by').filter(pk=pk)
        visible = filter_visible(actor, candidates, EntityClass.ACTION_GROUP)
        if not visible:
            raise ActionGroup.DoesNotExist(f"No visible action group with id {pk}")
        return visible[0]

    @staticmethod
    @transaction.atomic
    def create(actor, dto: ActionGroupCreateDTO) -> ActionGroup:
        """Create a group led by the actor. Listed members join right away."""
        group = ActionGroup(
            nome=dto.nome,
            descricao=dto.descricao or '',
            created_by=actor,
            updated_by=actor,
        )
        AccessPolicyService.enforce(actor, EntityClass.ACTION_GROUP, group, Operation.WRITE)
        group.full_clean()
        group.save()

        for member_id in dict.fromkeys(dto.member_ids):
            member = _get_active_user(member_id, 'member_ids')
            if member.pk != actor.pk:
                ActionGroupMember.objects.create(group=group, user=member)
        logger.info("Action group %s created by %s", group.pk, actor.pk)
        return group

    @staticmethod
    @transaction.atomic
    def update(actor, pk, dto: ActionGroupUpdateDTO) -> ActionGroup:
        group = ActionGroupService.get_visible(actor, pk)
        AccessPolicyService.enforce(
            actor, EntityClass.ACTION_GROUP, group, Operation.WRITE,
            message="Only the group creator can edit this group"
        )
        for name in ('nome', 'descricao', 'status'):
            value = getattr(dto, name)
            if value is not None:
                setattr(group, name, value)
        group.updated_by = actor
        group.full_clean()
        group.save()
        return group

    @staticmethod
    @transaction.atomic
    def delete(actor, pk):
        group = ActionGroupService.get_visible(actor, pk)
        AccessPolicyService.enforce(
            actor, EntityClass.ACTION_GROUP, group, Operation.DELETE,
            message="Only the group creator can delete this group"
        )
        group.delete()
        logger.info("Action group %s deleted by %s", pk, actor.pk)

    @staticmethod
    @transaction.atomic
    def add_member(actor, pk, user_id) -> ActionGroup:
        group = ActionGroupService.get_visible(actor, pk)
        AccessPolicyService.enforce(
            actor, EntityClass.ACTION_GROUP, group, Operation.WRITE,
            message="Only the group creator can add members"
        )
        _ensure_open(group)
        member = _get_active_user(user_id, 'user_id')
        if _is_participant(group, member.pk):
            raise ValidationError({'user_id': f'User {member.pk} already takes part in this group'})
        ActionGroupMember.objects.create(group=group, user=member)
        return group

    @staticmethod
    @transaction.atomic
    def remove_member(actor, pk, user_id) -> ActionGroup:
        """
        Remove a member. Members may leave on their own; removing someone
        else needs write access. Tasks the member held become unassigned.
        """
        group = ActionGroupService.get_visible(actor, pk)
        if not same_actor(actor.pk, user_id):
            AccessPolicyService.enforce(
                actor, EntityClass.ACTION_GROUP, group, Operation.WRITE,
                message="Only the group creator can remove members"
            )
        membership = group.memberships.filter(user_id=user_id).first()
        if membership is None:
            raise ValidationError({'user_id': f'User {user_id} is not a member of this group'})
        membership.delete()
        group.tasks.filter(responsavel_id=user_id).update(responsavel=None)
        return group


class ActionGroupTaskService:
    """Service for the task board of an action group"""

    @staticmethod
    def list_for_group(data_source, actor, group_id):
        from HR.action_groups.serializers import ActionGroupTaskSerializer

        def live_call():
            group = ActionGroupService.get_visible(actor, group_id)
            tasks = group.tasks.select_related('responsavel')
            return ActionGroupTaskSerializer(tasks, many=True).data

        rows = data_source.read(live_call, EntityClass.ACTION_GROUP_TASK)
        if data_source.is_degraded:
            sample_groups = bind_sample_rows_to_actor(
                get_sample_data(EntityClass.ACTION_GROUP), EntityClass.ACTION_GROUP, actor
            )
            sample_groups = filter_visible(actor, sample_groups, EntityClass.ACTION_GROUP)
            if not any(same_actor(row.get('id'), group_id) for row in sample_groups):
                return []
            rows = [row for row in rows if same_actor(row.get('group_id'), group_id)]
        return mask(rows, actor, EntityClass.ACTION_GROUP_TASK)

    @staticmethod
    def get_visible(actor, task_id) -> ActionGroupTask:
        """
        Raises:
            ActionGroupTask.DoesNotExist: missing, or its group is not visible
        """
        task = ActionGroupTask.objects.select_related('group', 'responsavel').get(pk=task_id)
        try:
            ActionGroupService.get_visible(actor, task.group_id)
        except ActionGroup.DoesNotExist:
            raise ActionGroupTask.DoesNotExist(f"No visible task with id {task_id}")
        return task

    @staticmethod
    def _resolve_assignee(group, responsavel_id):
        if responsavel_id is None:
            return None
        assignee = _get_active_user(responsavel_id, 'responsavel_id')
        if not _is_participant(group, assignee.pk):
            raise ValidationError({'responsavel_id': 'Tasks can only be assigned to group participants'})
        return assignee

    @staticmethod
    @transaction.atomic
    def create(actor, group_id, dto: TaskCreateDTO) -> ActionGroupTask:
        group = ActionGroupService.get_visible(actor, group_id)
        AccessPolicyService.enforce(
            actor, EntityClass.ACTION_GROUP, group, Operation.WRITE,
            message="Only the group creator can add tasks"
        )
        _ensure_open(group)
        task = ActionGroupTask(
            group=group,
            titulo=dto.titulo,
            descricao=dto.descricao or '',
            responsavel=ActionGroupTaskService._resolve_assignee(group, dto.responsavel_id),
            data_limite=dto.data_limite,
        )
        task.full_clean()
        task.save()
        return task

    @staticmethod
    @transaction.atomic
    def update(actor, task_id, dto: TaskUpdateDTO) -> ActionGroupTask:
        """
        Any participant may change a task's status; anything else needs
        write access on the group.
        """
        task = ActionGroupTaskService.get_visible(actor, task_id)
        group = task.group
        _ensure_open(group)

        if any(getattr(dto, name) is not None for name in ('titulo', 'responsavel_id', 'data_limite')):
            AccessPolicyService.enforce(
                actor, EntityClass.ACTION_GROUP, group, Operation.WRITE,
                message="Only the group creator can edit tasks"
            )
        if dto.titulo is not None:
            task.titulo = dto.titulo
        if dto.responsavel_id is not None:
            task.responsavel = ActionGroupTaskService._resolve_assignee(group, dto.responsavel_id)
        if dto.data_limite is not None:
            task.data_limite = dto.data_limite
        if dto.status is not None and dto.status != task.status:
            logger.info("Task %s moved from %s to %s by %s", task.pk, task.status, dto.status, actor.pk)
            task.status = dto.status
        task.full_clean()
        task.save()
        return task

    @staticmethod
    @transaction.atomic
    def delete(actor, task_id):
        task = ActionGroupTaskService.get_visible(actor, task_id)
        AccessPolicyService.enforce(
            actor, EntityClass.ACTION_GROUP, task.group, Operation.DELETE,
            message="Only the group creator can delete tasks"
        )
        task.delete()
