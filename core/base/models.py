from django.db import models
from django.conf import settings


class StatusChoices(models.TextChoices):
    """
    Standard status choices for accounts and soft-deletable records.

    Accounts are never hard-deleted; leaving the company flips them to INATIVO.
    """
    ATIVO = 'ativo', 'Ativo'
    INATIVO = 'inativo', 'Inativo'


class AuditMixin(models.Model):
    """
    Adds audit fields to track creation and modification metadata.

    Fields:
        - created_at: Timestamp when record was created
        - updated_at: Timestamp when record was last modified
        - created_by: User who created the record (optional)
        - updated_by: User who last modified the record (optional)

    Note: created_by and updated_by are set by the service layer, which
    always knows the acting user.
    """
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="Timestamp when record was created"
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="Timestamp when record was last modified"
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_created',
        help_text="User who created this record"
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_updated',
        help_text="User who last updated this record"
    )

    class Meta:
        abstract = True


class SoftDeleteMixin(models.Model):
    """
    Mixin for models that support soft deletion.

    Instead of permanently deleting records, they are marked as inactive.

    Fields:
        - status: StatusChoices (ATIVO/INATIVO)

    Methods:
        - deactivate(): Marks record as inactive (soft delete)
        - reactivate(): Marks record as active again
        - update_fields(field_updates): Set + validate + save in one call
        - hard_delete(): Permanently deletes the record from database
    """
    status = models.CharField(
        max_length=10,
        choices=StatusChoices.choices,
        default=StatusChoices.ATIVO,
        help_text="Record status. Set to INATIVO instead of deleting."
    )

    class Meta:
        abstract = True

    @property
    def is_ativo(self):
        return self.status == StatusChoices.ATIVO

    def deactivate(self):
        """Soft delete: mark as inactive instead of removing from DB."""
        self.status = StatusChoices.INATIVO
        self.save(update_fields=['status'])

    def reactivate(self):
        self.status = StatusChoices.ATIVO
        self.save(update_fields=['status'])

    def update_fields(self, field_updates: dict):
        """
        Update several fields, validate, and save.

        Example:
            team.update_fields({'nome': 'Plataforma', 'descricao': 'Squad de plataforma'})
        """
        for field_name, value in field_updates.items():
            setattr(self, field_name, value)
        self.full_clean()
        self.save()
        return self

    def hard_delete(self):
        """Permanently delete the record."""
        super().delete()
