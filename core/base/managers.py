"""
Core Base Managers Module

- BaseQuerySet: Generic filtering (nome/search)
- SoftDeleteQuerySet: For models with status field
- SoftDeleteManager: Manager for SoftDeleteMixin models

Usage:
    class Team(SoftDeleteMixin, models.Model):
        objects = SoftDeleteManager()

    Team.objects.active()
"""

from django.db import models
from django.db.models import Q
from core.base.models import StatusChoices


class BaseQuerySet(models.QuerySet):
    """
    Base QuerySet with common filtering methods.

    Subclasses list the text fields ``search`` matches in ``search_fields``.
    """
    search_fields = ('nome', 'descricao')

    def filter_by_search_params(self, query_params):
        """
        Apply standard nome/search filters from query parameters.

        Args:
            query_params: QueryDict or dict with optional keys:
                - nome: Contains match (case-insensitive)
                - search: Contains match across search_fields

        Returns:
            Filtered QuerySet
        """
        queryset = self

        nome = query_params.get('nome')
        if nome:
            queryset = queryset.filter(nome__icontains=nome)

        search = query_params.get('search')
        if search:
            condition = Q()
            for field in self.search_fields:
                condition |= Q(**{f'{field}__icontains': search})
            queryset = queryset.filter(condition)

        return queryset


class SoftDeleteQuerySet(BaseQuerySet):
    """
    QuerySet for SoftDeleteMixin models (models with status field).
    """

    def active(self):
        """Return only active records (status=ATIVO)."""
        return self.filter(status=StatusChoices.ATIVO)

    def inactive(self):
        """Return only inactive records (status=INATIVO)."""
        return self.filter(status=StatusChoices.INATIVO)


class SoftDeleteManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    """
    Manager for SoftDeleteMixin models.

        Team.objects.active()
        Team.objects.inactive()
    """
    pass
