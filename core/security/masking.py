"""
Confidentiality masking for serialized rows.

mask(records, actor) hides the subject of confidential rows from anyone who
is neither rh nor the subject. Every output row gets a ``confidential``
flag. Inputs are copied, never mutated, and masking a masked list gives
the same list back.

A row without a readable sensitivity falls back to the default declared
for its entity class, and to confidential when there is none. A
confidential row without a readable owner is hidden from everyone but rh.
"""
import logging
from collections.abc import Mapping

from django.conf import settings

from core.security.ownership import Sensitivity, get_ownership
from core.security.policy import ActorContext, same_actor
from core.security.roles import Role

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = 'Paciente Confidencial'
GENERIC_OWNER_KEYS = ('owner_id', 'owner', 'user_id', 'user')
GENERIC_DISPLAY_KEYS = ('display_name', 'user_nome', 'nome')


def get_placeholder():
    return getattr(settings, 'PDI_CONFIDENTIAL_PLACEHOLDER', DEFAULT_PLACEHOLDER)


def _owner_keys(spec):
    return spec.owner_key_candidates if spec else GENERIC_OWNER_KEYS


def _display_key(spec, row):
    if spec:
        return spec.display_name_key
    for key in GENERIC_DISPLAY_KEYS:
        if key in row:
            return key
    return GENERIC_DISPLAY_KEYS[0]


def _read_owner(row, keys):
    for key in keys:
        if row.get(key) is not None:
            return row[key]
    return None


def read_sensitivity(row, spec=None):
    """
    Sensitivity of a row: its own field, else the class default, else
    confidential.
    """
    value = row.get('sensitivity')
    if value in Sensitivity.values:
        return value
    if value is None and spec is not None:
        return spec.sensitivity
    return Sensitivity.CONFIDENTIAL


def mask_record(record, actor, entity_class=None):
    """Mask one row. See ``mask``."""
    actor = ActorContext.coerce(actor)
    spec = get_ownership(entity_class) if entity_class else None

    if not isinstance(record, Mapping):
        logger.warning("Masking a non-mapping row of type %s; hiding it entirely", type(record).__name__)
        row = {}
    else:
        row = dict(record)

    owner_keys = _owner_keys(spec)
    owner_id = _read_owner(row, owner_keys)

    hide = (
        read_sensitivity(row, spec) == Sensitivity.CONFIDENTIAL
        and (actor is None or actor.role != Role.RH)
        and not same_actor(owner_id, actor.id if actor else None)
    )

    if hide:
        row[_display_key(spec, row)] = get_placeholder()
        for key in owner_keys:
            if key in row:
                row[key] = None
        row['confidential'] = True
    else:
        row['confidential'] = False
    return row


def mask(records, actor, entity_class=None):
    """
    Return masked copies of ``records`` for ``actor``.

    Args:
        records: iterable of dicts (serializer output or sample rows)
        actor: ActorContext, user account or mapping
        entity_class: optional EntityClass; selects the owner and
            display-name keys from the ownership map

    Returns:
        list of new dicts, same length and order as the input
    """
    actor = ActorContext.coerce(actor)
    return [mask_record(record, actor, entity_class) for record in records]
