"""
Access policy services.

The read pipeline every domain service goes through:

    queryset.visible_to(actor)  ->  evaluator  ->  serialize  ->  mask
                     (data_source.read substitutes sample rows on failure)

and the write gate that turns a deny decision into PermissionDenied.
"""
import logging

from django.core.exceptions import PermissionDenied

from core.security.masking import mask
from core.security.ownership import EntityClass, get_ownership
from core.security.policy import ActorContext, RH_BLANKET_CLASSES, check, filter_visible
from core.security.roles import Role

logger = logging.getLogger(__name__)


def bind_sample_rows(rows, entity_class, owner_id, display_name=None):
    """
    Point the owner fields of sample rows at ``owner_id``.

    Sample rows carry placeholder owner ids that mean nothing in the live
    database. Binding them to a real account lets the evaluator treat them
    as that account's own rows. Profiles and admin-only classes are
    returned unchanged.
    """
    spec = get_ownership(entity_class)
    if spec is None or spec.admin_only or spec.entity_class == EntityClass.PROFILE:
        return rows
    bound = []
    for row in rows:
        row = dict(row)
        for key in spec.owner_key_candidates:
            if key in row:
                row[key] = owner_id
        if display_name and spec.display_name_key in row:
            row[spec.display_name_key] = display_name
        bound.append(row)
    return bound


def bind_sample_rows_to_actor(rows, entity_class, actor):
    """
    Bind sample rows to the reading actor.

    Admins see every row anyway, and rh already sees every HR record and
    HR test, so their rows keep the sample owners.
    """
    actor_ctx = ActorContext.coerce(actor)
    if actor_ctx is None or actor_ctx.role == Role.ADMIN:
        return rows
    if actor_ctx.role == Role.RH and entity_class in RH_BLANKET_CLASSES:
        return rows
    return bind_sample_rows(rows, entity_class, actor_ctx.id, getattr(actor, 'nome', None))


class AccessPolicyService:

    @staticmethod
    def enforce(actor, entity_class, obj, operation, message=None):
        """
        Raise PermissionDenied unless ``actor`` may perform ``operation`` on ``obj``.

        Returns:
            VisibilityDecision when allowed
        """
        decision = check(actor, entity_class, obj, operation)
        if not decision.allow:
            actor_ctx = ActorContext.coerce(actor)
            logger.info(
                "Denied %s on %s #%s for actor %s (%s)",
                operation,
                entity_class,
                getattr(obj, 'pk', None),
                actor_ctx.id if actor_ctx else None,
                decision.reason,
            )
            raise PermissionDenied(message or f"You do not have permission to {operation} this record")
        return decision

    @staticmethod
    def can(actor, entity_class, obj, operation):
        return check(actor, entity_class, obj, operation).allow

    @staticmethod
    def read_visible(data_source, actor, entity_class, queryset, serialize, supervisor_of=None):
        """
        Read rows through the full policy pipeline.

        Args:
            data_source: DataSourceContext
            actor: user account or ActorContext
            entity_class: EntityClass of the rows
            queryset: a queryset exposing visible_to(actor)
            serialize: callable turning a list of rows into a list of dicts
            supervisor_of: optional owner -> supervisor lookup for sample rows

        Returns:
            list of masked dicts
        """
        def live_call():
            rows = list(queryset.visible_to(actor))
            rows = filter_visible(actor, rows, entity_class)
            return serialize(rows)

        rows = data_source.read(live_call, entity_class)
        if data_source.is_degraded:
            logger.debug("Serving sample %s rows in degraded mode", entity_class)
            rows = bind_sample_rows_to_actor(rows, entity_class, actor)
            rows = filter_visible(actor, rows, entity_class, supervisor_of=supervisor_of)
        return mask(rows, actor, entity_class)
