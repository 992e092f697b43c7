"""
Role registry and policy operations.

Roles are a fixed, flat set. There is no hierarchy object: a gestor's reach
into a report's records comes from the report's supervisor pointer, not
from the role itself.
"""
from django.db import models


class Role(models.TextChoices):
    ADMIN = 'admin', 'Administrador'
    GESTOR = 'gestor', 'Gestor'
    COLABORADOR = 'colaborador', 'Colaborador'
    RH = 'rh', 'Recursos Humanos'


ROLE_VALUES = frozenset(Role.values)


class Operation:
    """Operations the evaluator understands. Anything else is denied."""
    READ = 'read'
    WRITE = 'write'
    DELETE = 'delete'
    EVALUATE = 'evaluate'


ALL_OPERATIONS = frozenset({
    Operation.READ,
    Operation.WRITE,
    Operation.DELETE,
    Operation.EVALUATE,
})


def is_known_role(value):
    return isinstance(value, str) and value in ROLE_VALUES