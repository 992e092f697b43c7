"""
User account services: profile edits and admin-only account changes.

Role, supervisor and status changes are evaluated against the
role-assignment class, which only admins may write.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from core.security.ownership import EntityClass
from core.security.roles import Operation, Role
from core.security.services import AccessPolicyService
from .models import CustomUser

logger = logging.getLogger(__name__)

SUPERVISOR_ROLES = (Role.GESTOR, Role.ADMIN)


class UserAccountService:

    @staticmethod
    def list_users(data_source, actor, query_params=None):
        from .serializers import UserListSerializer
        return AccessPolicyService.read_visible(
            data_source,
            actor,
            EntityClass.PROFILE,
            CustomUser.objects.select_related('gestor').filter_by_search_params(query_params or {}),
            lambda rows: UserListSerializer(rows, many=True).data,
        )

    @staticmethod
    @transaction.atomic
    def update_profile(actor, user, changes: dict):
        """Apply self-editable profile fields."""
        AccessPolicyService.enforce(actor, EntityClass.PROFILE, user, Operation.WRITE)
        for field, value in changes.items():
            setattr(user, field, value)
        user.full_clean()
        user.save()
        return user

    @staticmethod
    @transaction.atomic
    def assign_role(actor, target, role):
        AccessPolicyService.enforce(
            actor, EntityClass.ROLE_ASSIGNMENT, target, Operation.WRITE,
            message="Only administrators can assign roles"
        )
        if role not in Role.values:
            raise ValidationError({'role': f'Unknown role: {role}'})
        if target.pk == actor.pk and role != target.role:
            raise ValidationError({'role': 'You cannot change your own role'})

        previous = target.role
        target.role = role
        target.save(update_fields=['role', 'updated_at'])
        logger.info("Role of user %s changed from %s to %s by %s", target.pk, previous, role, actor.pk)
        return target

    @staticmethod
    @transaction.atomic
    def assign_supervisor(actor, target, gestor_id):
        AccessPolicyService.enforce(
            actor, EntityClass.ROLE_ASSIGNMENT, target, Operation.WRITE,
            message="Only administrators can assign supervisors"
        )
        gestor = None
        if gestor_id is not None:
            if str(gestor_id) == str(target.pk):
                raise ValidationError({'gestor_id': 'A user cannot supervise themselves'})
            try:
                gestor = CustomUser.objects.active().get(pk=gestor_id)
            except CustomUser.DoesNotExist:
                raise ValidationError({'gestor_id': f'No active user with id {gestor_id}'})
            if gestor.role not in SUPERVISOR_ROLES:
                raise ValidationError({'gestor_id': 'Supervisor must be a gestor or admin'})

        target.gestor = gestor
        target.save(update_fields=['gestor', 'updated_at'])
        return target

    @staticmethod
    @transaction.atomic
    def deactivate(actor, target):
        AccessPolicyService.enforce(
            actor, EntityClass.ROLE_ASSIGNMENT, target, Operation.WRITE,
            message="Only administrators can deactivate accounts"
        )
        if target.pk == actor.pk:
            raise ValidationError('You cannot deactivate your own account')
        target.deactivate()
        logger.info("User %s deactivated by %s", target.pk, actor.pk)
        return target
