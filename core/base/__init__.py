"""
Core Base Module

Shared base classes, mixins, and managers for the PDI apps.

Exports:
    Basic Utilities:
        - StatusChoices: ativo/inativo, shared by accounts and soft-deletable rows

    Individual Feature Mixins:
        - AuditMixin: Adds created_at, updated_at, created_by, updated_by
        - SoftDeleteMixin: Adds status + soft delete behavior

    Managers & QuerySets:
        - BaseQuerySet: Base queryset with filter_by_search_params
        - SoftDeleteQuerySet: QuerySet with active()/inactive() filters
        - SoftDeleteManager: Manager for SoftDeleteMixin models

Usage:
    from core.base import SoftDeleteMixin, AuditMixin
    from core.base.managers import SoftDeleteManager

    class Team(SoftDeleteMixin, AuditMixin, models.Model):
        nome = models.CharField(max_length=128)
        objects = SoftDeleteManager()
"""

from core.base.models import (
    StatusChoices,
    AuditMixin,
    SoftDeleteMixin,
)

from core.base.managers import (
    BaseQuerySet,
    SoftDeleteQuerySet,
    SoftDeleteManager,
)

__all__ = [
    'StatusChoices',
    'AuditMixin',
    'SoftDeleteMixin',
    'BaseQuerySet',
    'SoftDeleteQuerySet',
    'SoftDeleteManager',
]
