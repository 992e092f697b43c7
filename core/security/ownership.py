"""
Entity ownership map.

Each entity class declares which attribute names its owning actor, an
optional secondary actor (mentor, evaluator, author), its default
sensitivity and the operations its owner may perform. The evaluator and
the server-side managers both read from this table.
"""
from dataclasses import dataclass

from django.db import models

from core.security.roles import Operation


class EntityClass(models.TextChoices):
    PROFILE = 'profile', 'Profile'
    PDI_OBJECTIVE = 'pdi_objective', 'PDI Objective'
    PDI_COMMENT = 'pdi_comment', 'PDI Comment'
    ASSESSMENT = 'assessment', 'Assessment'
    SALARY_RECORD = 'salary_record', 'Salary Record'
    HR_RECORD = 'hr_record', 'HR Record'
    HR_TEST = 'hr_test', 'HR Test'
    TEAM = 'team', 'Team'
    ACHIEVEMENT = 'achievement', 'Achievement'
    ROLE_ASSIGNMENT = 'role_assignment', 'Role Assignment'
    TRACK_CONFIGURATION = 'track_configuration', 'Track Configuration'
    TOUCHPOINT = 'touchpoint', 'Touchpoint'
    ACTION_GROUP = 'action_group', 'Action Group'
    ACTION_GROUP_TASK = 'action_group_task', 'Action Group Task'


class Sensitivity(models.TextChoices):
    NORMAL = 'normal', 'Normal'
    CONFIDENTIAL = 'confidential', 'Confidential'


OWNER_READ_WRITE = frozenset({Operation.READ, Operation.WRITE})
OWNER_READ_ONLY = frozenset({Operation.READ})
NO_OWNER_OPERATIONS = frozenset()


@dataclass(frozen=True)
class OwnershipSpec:
    """
    Ownership declaration for one entity class.

    owner_attr:       attribute holding the owning actor id ('id' for profiles)
    supervisor_path:  '__'-separated path from the row to the owner's supervisor id
    secondary_attr:   attribute holding the secondary actor id, if any
    participants_attr: attribute (and row key) listing participant actor ids
    participant_path: '__'-separated path from the row to a participant id
    """
    entity_class: str
    owner_attr: str
    supervisor_path: str = None
    secondary_attr: str = None
    sensitivity: str = Sensitivity.NORMAL
    owner_operations: frozenset = OWNER_READ_WRITE
    admin_only: bool = False
    display_name_key: str = 'nome'
    participants_attr: str = None
    participant_path: str = None
    participant_operations: frozenset = NO_OWNER_OPERATIONS

    @property
    def owner_key_candidates(self):
        """Keys a serialized row may carry its owner id under."""
        keys = [self.owner_attr]
        if self.owner_attr.endswith('_id'):
            keys.append(self.owner_attr[:-3])
        keys.extend(('owner_id', 'owner'))
        return keys


OWNERSHIP_MAP = {
    EntityClass.PROFILE: OwnershipSpec(
        entity_class=EntityClass.PROFILE,
        owner_attr='id',
        supervisor_path='gestor_id',
        secondary_attr='gestor_id',
    ),
    EntityClass.PDI_OBJECTIVE: OwnershipSpec(
        entity_class=EntityClass.PDI_OBJECTIVE,
        owner_attr='colaborador_id',
        supervisor_path='colaborador__gestor_id',
        secondary_attr='mentor_id',
        display_name_key='colaborador_nome',
    ),
    EntityClass.PDI_COMMENT: OwnershipSpec(
        entity_class=EntityClass.PDI_COMMENT,
        owner_attr='user_id',
        supervisor_path='user__gestor_id',
        owner_operations=frozenset({Operation.READ, Operation.WRITE, Operation.DELETE}),
        display_name_key='user_nome',
    ),
    EntityClass.ASSESSMENT: OwnershipSpec(
        entity_class=EntityClass.ASSESSMENT,
        owner_attr='avaliado_id',
        supervisor_path='avaliado__gestor_id',
        secondary_attr='avaliador_id',
        display_name_key='avaliado_nome',
    ),
    EntityClass.SALARY_RECORD: OwnershipSpec(
        entity_class=EntityClass.SALARY_RECORD,
        owner_attr='user_id',
        supervisor_path='user__gestor_id',
        owner_operations=OWNER_READ_ONLY,
        display_name_key='user_nome',
    ),
    EntityClass.HR_RECORD: OwnershipSpec(
        entity_class=EntityClass.HR_RECORD,
        owner_attr='user_id',
        supervisor_path='user__gestor_id',
        secondary_attr='created_by_id',
        sensitivity=Sensitivity.CONFIDENTIAL,
        display_name_key='user_nome',
    ),
    EntityClass.HR_TEST: OwnershipSpec(
        entity_class=EntityClass.HR_TEST,
        owner_attr='user_id',
        supervisor_path='user__gestor_id',
        secondary_attr='administered_by_id',
        sensitivity=Sensitivity.CONFIDENTIAL,
        display_name_key='user_nome',
    ),
    EntityClass.TEAM: OwnershipSpec(
        entity_class=EntityClass.TEAM,
        owner_attr='leader_id',
        supervisor_path='leader__gestor_id',
        secondary_attr='created_by_id',
        display_name_key='leader_nome',
    ),
    EntityClass.ACHIEVEMENT: OwnershipSpec(
        entity_class=EntityClass.ACHIEVEMENT,
        owner_attr='user_id',
        supervisor_path='user__gestor_id',
        secondary_attr='objective_id',
        owner_operations=OWNER_READ_ONLY,
        display_name_key='user_nome',
    ),
    EntityClass.ROLE_ASSIGNMENT: OwnershipSpec(
        entity_class=EntityClass.ROLE_ASSIGNMENT,
        owner_attr='id',
        owner_operations=NO_OWNER_OPERATIONS,
        admin_only=True,
    ),
    EntityClass.TRACK_CONFIGURATION: OwnershipSpec(
        entity_class=EntityClass.TRACK_CONFIGURATION,
        owner_attr='created_by_id',
        owner_operations=NO_OWNER_OPERATIONS,
        admin_only=True,
    ),
    EntityClass.TOUCHPOINT: OwnershipSpec(
        entity_class=EntityClass.TOUCHPOINT,
        owner_attr='colaborador_id',
        supervisor_path='colaborador__gestor_id',
        secondary_attr='gestor_id',
        owner_operations=OWNER_READ_ONLY,
        display_name_key='colaborador_nome',
    ),
    EntityClass.ACTION_GROUP: OwnershipSpec(
        entity_class=EntityClass.ACTION_GROUP,
        owner_attr='created_by_id',
        owner_operations=frozenset({Operation.READ, Operation.WRITE, Operation.DELETE}),
        display_name_key='created_by_nome',
        participants_attr='member_ids',
        participant_path='memberships__user_id',
        participant_operations=OWNER_READ_ONLY,
    ),
    EntityClass.ACTION_GROUP_TASK: OwnershipSpec(
        entity_class=EntityClass.ACTION_GROUP_TASK,
        owner_attr='responsavel_id',
        secondary_attr='group_id',
        owner_operations=OWNER_READ_ONLY,
        display_name_key='responsavel_nome',
    ),
}


def get_ownership(entity_class):
    """Return the OwnershipSpec for a class, or None for unknown classes."""
    try:
        return OWNERSHIP_MAP.get(entity_class)
    except TypeError:
        # unhashable input
        return None
