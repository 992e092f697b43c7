"""
Server-side row policy for querysets.

PolicyScopedQuerySetMixin.visible_to(actor) narrows a queryset to the rows
the evaluator would allow, expressed as a database filter. Services read
through it first and then run the evaluator over the materialized rows,
so the two layers check each other.

Usage:
    class PDIObjectiveQuerySet(PolicyScopedQuerySetMixin, models.QuerySet):
        policy_entity_class = EntityClass.PDI_OBJECTIVE

    PDIObjective.objects.visible_to(request.user)
"""
from django.db.models import Q

from core.security.ownership import get_ownership
from core.security.policy import (
    ActorContext,
    RH_BLANKET_CLASSES,
    SUPERVISED_CLASSES,
    SUPERVISOR_OPERATIONS,
)
from core.security.roles import ALL_OPERATIONS, Operation, Role, is_known_role


class PolicyScopedQuerySetMixin:
    """
    Mixin for QuerySets of owned entities.

    Subclasses set ``policy_entity_class``.
    """
    policy_entity_class = None

    def visible_to(self, actor, operation=Operation.READ):
        actor = ActorContext.coerce(actor)
        spec = get_ownership(self.policy_entity_class)

        if (
            actor is None
            or spec is None
            or operation not in ALL_OPERATIONS
            or not is_known_role(actor.role)
            or not actor.is_active
        ):
            return self.none()

        if actor.role == Role.ADMIN:
            return self.all()

        if actor.role == Role.RH and spec.entity_class in RH_BLANKET_CLASSES:
            return self.all()

        filters = Q()
        matched = False

        if operation in spec.owner_operations:
            filters |= Q(**{spec.owner_attr: actor.id})
            matched = True

        joins_participants = bool(spec.participant_path) and operation in spec.participant_operations
        if joins_participants:
            filters |= Q(**{spec.participant_path: actor.id})
            matched = True

        if (
            spec.entity_class in SUPERVISED_CLASSES
            and actor.role == Role.GESTOR
            and operation in SUPERVISOR_OPERATIONS
        ):
            filters |= Q(**{spec.supervisor_path: actor.id})
            matched = True

        if not matched:
            return self.none()
        if joins_participants:
            # one row per participant match otherwise
            return self.filter(filters).distinct()
        return self.filter(filters)
