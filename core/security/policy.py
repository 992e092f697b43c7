"""
Visibility policy evaluator.

evaluate(actor, record, operation) -> VisibilityDecision

Rules are applied in order and the first match wins:
    0. inactive actors are denied everything
    1. admin may do anything
    2. rh may do anything on HR records and HR tests
    3. the owner may perform the owner operations declared for the class
    4. a participant (action group member) may perform the participant
       operations declared for the class
    5. a gestor may read and evaluate PDI objectives, assessments and
       touchpoints of direct reports (one level only)
    6. deny

The evaluator never raises. Malformed input produces a deny decision.
Decisions are computed per call and never cached, so role and status
changes apply on the next request.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from core.security.ownership import EntityClass, Sensitivity, get_ownership
from core.security.roles import ALL_OPERATIONS, Operation, Role, is_known_role

logger = logging.getLogger(__name__)

ACTIVE_STATUS = 'ativo'

RH_BLANKET_CLASSES = frozenset({EntityClass.HR_RECORD, EntityClass.HR_TEST})
SUPERVISED_CLASSES = frozenset({EntityClass.PDI_OBJECTIVE, EntityClass.ASSESSMENT, EntityClass.TOUCHPOINT})
SUPERVISOR_OPERATIONS = frozenset({Operation.READ, Operation.EVALUATE})


class Reason:
    NO_ACTOR = 'no_actor'
    MALFORMED_RECORD = 'malformed_record'
    UNKNOWN_OPERATION = 'unknown_operation'
    UNKNOWN_ROLE = 'unknown_role'
    UNKNOWN_CLASS = 'unknown_entity_class'
    INACTIVE_ACTOR = 'inactive_actor'
    ADMIN = 'admin'
    RH_BLANKET = 'rh_blanket'
    OWNER = 'owner'
    PARTICIPANT = 'participant'
    SUPERVISOR = 'direct_supervisor'
    DEFAULT_DENY = 'default_deny'


def same_actor(a, b):
    """Compare actor ids the way URL kwargs and pks are compared elsewhere."""
    if a is None or b is None:
        return False
    return str(a) == str(b)


@dataclass(frozen=True)
class ActorContext:
    """Snapshot of the acting user taken at the start of a request."""
    id: object
    role: str
    status: str = ACTIVE_STATUS
    supervisor_id: object = None

    @classmethod
    def from_user(cls, user):
        """Build from a user account. Anonymous users give None."""
        if user is None or not getattr(user, 'is_authenticated', False):
            return None
        return cls(
            id=user.pk,
            role=getattr(user, 'role', None),
            status=getattr(user, 'status', None),
            supervisor_id=getattr(user, 'gestor_id', None),
        )

    @classmethod
    def coerce(cls, value):
        """
        Accept an ActorContext, a user account or a mapping with
        id/role/status/supervisor_id keys. Returns None when unusable.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            if value.get('id') is None:
                return None
            return cls(
                id=value.get('id'),
                role=value.get('role'),
                status=value.get('status', ACTIVE_STATUS),
                supervisor_id=value.get('supervisor_id'),
            )
        if value is not None and hasattr(value, 'pk'):
            return cls.from_user(value)
        return None

    @property
    def is_active(self):
        return self.status == ACTIVE_STATUS


def _resolve_path(obj, path):
    """Follow a '__'-separated attribute path, stopping at the first None."""
    current = obj
    for part in path.split('__'):
        if current is None:
            return None
        current = getattr(current, part, None)
    return current


def _first_present(mapping, keys):
    for key in keys:
        if key in mapping and mapping[key] is not None:
            return mapping[key]
    return None


def _id_set(values):
    """Participant ids as strings. Anything but a list, tuple or set gives no ids."""
    if not isinstance(values, (list, tuple, set, frozenset)):
        return frozenset()
    return frozenset(str(value) for value in values if value is not None)


def _instance_participants(spec, obj):
    # unsaved rows have no participants yet
    if not spec.participants_attr or getattr(obj, 'pk', None) is None:
        return frozenset()
    return _id_set(getattr(obj, spec.participants_attr, None))


@dataclass(frozen=True)
class OwnedRecord:
    """The slice of an entity the evaluator looks at."""
    entity_class: str
    owner_id: object = None
    owner_supervisor_id: object = None
    secondary_actor_id: object = None
    sensitivity: str = Sensitivity.NORMAL
    record_id: object = None
    participant_ids: frozenset = frozenset()

    @classmethod
    def from_instance(cls, entity_class, obj):
        """Adapt an ORM row using the ownership map."""
        spec = get_ownership(entity_class)
        if spec is None or obj is None:
            return None
        return cls(
            entity_class=spec.entity_class,
            owner_id=getattr(obj, spec.owner_attr, None),
            owner_supervisor_id=_resolve_path(obj, spec.supervisor_path) if spec.supervisor_path else None,
            secondary_actor_id=getattr(obj, spec.secondary_attr, None) if spec.secondary_attr else None,
            sensitivity=getattr(obj, 'sensitivity', None) or spec.sensitivity,
            record_id=getattr(obj, 'pk', None),
            participant_ids=_instance_participants(spec, obj),
        )

    @classmethod
    def from_mapping(cls, entity_class, mapping, supervisor_of=None):
        """
        Adapt a serialized row.

        The owner's supervisor is read from ``owner_supervisor_id`` or
        ``supervisor_id``; failing that, ``supervisor_of`` (a dict or a
        callable keyed by owner id) is consulted.
        """
        spec = get_ownership(entity_class)
        if spec is None or not isinstance(mapping, Mapping):
            return None
        owner_id = _first_present(mapping, spec.owner_key_candidates)
        supervisor_id = _first_present(mapping, ('owner_supervisor_id', 'supervisor_id'))
        if supervisor_id is None and owner_id is not None and supervisor_of is not None:
            if callable(supervisor_of):
                supervisor_id = supervisor_of(owner_id)
            else:
                supervisor_id = supervisor_of.get(owner_id)
        return cls(
            entity_class=spec.entity_class,
            owner_id=owner_id,
            owner_supervisor_id=supervisor_id,
            secondary_actor_id=mapping.get(spec.secondary_attr) if spec.secondary_attr else None,
            sensitivity=mapping.get('sensitivity') or spec.sensitivity,
            record_id=mapping.get('id'),
            participant_ids=_id_set(mapping.get(spec.participants_attr)) if spec.participants_attr else frozenset(),
        )


@dataclass(frozen=True)
class VisibilityDecision:
    allow: bool
    reason: str
    masked: bool = False

    def __bool__(self):
        return self.allow


def _deny(reason):
    return VisibilityDecision(allow=False, reason=reason, masked=False)


def _allow(reason, actor, record):
    masked = (
        record.sensitivity == Sensitivity.CONFIDENTIAL
        and actor.role != Role.RH
        and not same_actor(record.owner_id, actor.id)
    )
    return VisibilityDecision(allow=True, reason=reason, masked=masked)


def evaluate(actor, record, operation):
    """
    Decide whether ``actor`` may perform ``operation`` on ``record``.

    Args:
        actor: ActorContext, user account, or mapping
        record: OwnedRecord
        operation: one of Operation.*

    Returns:
        VisibilityDecision (never raises)
    """
    actor = ActorContext.coerce(actor)
    if actor is None:
        return _deny(Reason.NO_ACTOR)
    if not isinstance(record, OwnedRecord):
        return _deny(Reason.MALFORMED_RECORD)
    if not isinstance(operation, str) or operation not in ALL_OPERATIONS:
        return _deny(Reason.UNKNOWN_OPERATION)
    if not is_known_role(actor.role):
        return _deny(Reason.UNKNOWN_ROLE)

    spec = get_ownership(record.entity_class)
    if spec is None:
        return _deny(Reason.UNKNOWN_CLASS)

    if not actor.is_active:
        return _deny(Reason.INACTIVE_ACTOR)

    if actor.role == Role.ADMIN:
        return _allow(Reason.ADMIN, actor, record)

    if actor.role == Role.RH and spec.entity_class in RH_BLANKET_CLASSES:
        return _allow(Reason.RH_BLANKET, actor, record)

    if same_actor(record.owner_id, actor.id) and operation in spec.owner_operations:
        return _allow(Reason.OWNER, actor, record)

    if operation in spec.participant_operations and any(
        same_actor(participant, actor.id) for participant in record.participant_ids
    ):
        return _allow(Reason.PARTICIPANT, actor, record)

    if (
        spec.entity_class in SUPERVISED_CLASSES
        and actor.role == Role.GESTOR
        and operation in SUPERVISOR_OPERATIONS
        and same_actor(record.owner_supervisor_id, actor.id)
    ):
        return _allow(Reason.SUPERVISOR, actor, record)

    return _deny(Reason.DEFAULT_DENY)


def is_allowed(actor, record, operation):
    return evaluate(actor, record, operation).allow


def to_owned_record(entity_class, item, supervisor_of=None):
    if isinstance(item, OwnedRecord):
        return item
    if isinstance(item, Mapping):
        return OwnedRecord.from_mapping(entity_class, item, supervisor_of=supervisor_of)
    return OwnedRecord.from_instance(entity_class, item)


def filter_visible(actor, records, entity_class, operation=Operation.READ, supervisor_of=None):
    """
    Keep the items ``actor`` may perform ``operation`` on.

    Items may be OwnedRecords, ORM rows or serialized dicts; they are
    returned unchanged and in their original order.
    """
    actor = ActorContext.coerce(actor)
    visible = []
    for item in records:
        record = to_owned_record(entity_class, item, supervisor_of=supervisor_of)
        if evaluate(actor, record, operation).allow:
            visible.append(item)
    return visible


def check(actor, entity_class, obj, operation):
    """Evaluate an ORM row directly. Returns the VisibilityDecision."""
    decision = evaluate(actor, OwnedRecord.from_instance(entity_class, obj), operation)
    if not decision.allow:
        logger.debug(
            "Denied %s on %s #%s: %s",
            operation, entity_class, getattr(obj, 'pk', None), decision.reason
        )
    return decision
