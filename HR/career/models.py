from django.conf import settings
from django.db import models

from core.base.managers import SoftDeleteManager
from core.base.models import AuditMixin, SoftDeleteMixin
from core.security.managers import PolicyScopedQuerySetMixin
from core.security.ownership import EntityClass


class CareerTrack(SoftDeleteMixin, AuditMixin, models.Model):
    """
    A career track (e.g. Desenvolvimento Backend) made of ordered stages.

    Reference data: every active user may read it, only admins configure it.
    """
    nome = models.CharField(max_length=128, unique=True)
    descricao = models.TextField(blank=True, default='')

    objects = SoftDeleteManager()

    class Meta:
        db_table = 'career_tracks'
        ordering = ['nome']

    def __str__(self):
        return self.nome


class CareerStage(models.Model):
    class Fase(models.TextChoices):
        DESENVOLVIMENTO = 'desenvolvimento', 'Desenvolvimento'
        ESPECIALIZACAO = 'especializacao', 'Especialização'

    trilha = models.ForeignKey(CareerTrack, on_delete=models.CASCADE, related_name='stages')
    fase = models.CharField(max_length=20, choices=Fase.choices, default=Fase.DESENVOLVIMENTO)
    titulo = models.CharField(max_length=128)
    ordem = models.PositiveIntegerField()
    is_final = models.BooleanField(default=False)

    class Meta:
        db_table = 'career_stages'
        ordering = ['trilha', 'ordem']
        unique_together = [('trilha', 'ordem')]

    def __str__(self):
        return f"{self.trilha.nome} / {self.titulo}"


class Competency(models.Model):
    class Tipo(models.TextChoices):
        HARD = 'hard', 'Hard skill'
        SOFT = 'soft', 'Soft skill'

    nome = models.CharField(max_length=128)
    tipo = models.CharField(max_length=4, choices=Tipo.choices)
    stage = models.ForeignKey(
        CareerStage,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='competencies'
    )
    descricao = models.TextField(blank=True, default='')

    class Meta:
        db_table = 'competencies'
        ordering = ['nome']
        verbose_name_plural = 'Competencies'

    def __str__(self):
        return self.nome


class SalaryHistoryQuerySet(PolicyScopedQuerySetMixin, models.QuerySet):
    policy_entity_class = EntityClass.SALARY_RECORD


class SalaryHistory(models.Model):
    """Salary changes of one user. Read-only to the user; admins record them."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='salary_history'
    )
    cargo = models.CharField(max_length=128, blank=True, default='')
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    data_inicio = models.DateField()
    data_fim = models.DateField(null=True, blank=True)
    motivo = models.CharField(max_length=255, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    objects = models.Manager.from_queryset(SalaryHistoryQuerySet)()

    class Meta:
        db_table = 'salary_history'
        ordering = ['-data_inicio']
        verbose_name_plural = 'Salary history'
