from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.base.models import AuditMixin
from core.security.managers import PolicyScopedQuerySetMixin
from core.security.ownership import EntityClass


class PDIObjectiveQuerySet(PolicyScopedQuerySetMixin, models.QuerySet):
    policy_entity_class = EntityClass.PDI_OBJECTIVE

    def open(self):
        return self.filter(objetivo_status__in=[
            PDIObjective.ObjetivoStatus.PENDENTE,
            PDIObjective.ObjetivoStatus.EM_ANDAMENTO,
        ])

    def completed(self):
        return self.filter(objetivo_status=PDIObjective.ObjetivoStatus.CONCLUIDO)


class PDIObjective(AuditMixin, models.Model):
    """
    One objective in a user's development plan.

    ``status`` tracks the proposal/approval decision taken by the supervisor;
    ``objetivo_status`` and ``progresso`` are maintained by the owner.
    """

    class Status(models.TextChoices):
        PROPOSTO_COLABORADOR = 'proposto_colaborador', 'Proposto pelo colaborador'
        PROPOSTO_GESTOR = 'proposto_gestor', 'Proposto pelo gestor'
        APROVADO = 'aprovado', 'Aprovado'
        REJEITADO = 'rejeitado', 'Rejeitado'

    class ObjetivoStatus(models.TextChoices):
        PENDENTE = 'pendente', 'Pendente'
        EM_ANDAMENTO = 'em_andamento', 'Em andamento'
        CONCLUIDO = 'concluido', 'Concluído'
        CANCELADO = 'cancelado', 'Cancelado'

    colaborador = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='pdi_objectives'
    )
    competency = models.ForeignKey(
        'career.Competency',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='pdi_objectives'
    )
    mentor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='mentored_objectives'
    )
    titulo = models.CharField(max_length=255)
    descricao = models.TextField(blank=True, default='')
    status = models.CharField(max_length=25, choices=Status.choices, default=Status.PROPOSTO_COLABORADOR)
    objetivo_status = models.CharField(
        max_length=15,
        choices=ObjetivoStatus.choices,
        default=ObjetivoStatus.PENDENTE
    )
    progresso = models.PositiveSmallIntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    pontos_extra = models.PositiveIntegerField(default=0)
    data_inicio = models.DateField(null=True, blank=True)
    data_fim = models.DateField(null=True, blank=True)

    objects = models.Manager.from_queryset(PDIObjectiveQuerySet)()

    class Meta:
        db_table = 'pdi_objectives'
        ordering = ['-created_at']

    def __str__(self):
        return self.titulo

    def clean(self):
        if self.data_inicio and self.data_fim and self.data_fim < self.data_inicio:
            raise ValidationError({'data_fim': 'End date cannot be before start date'})
        if self.mentor_id and self.mentor_id == self.colaborador_id:
            raise ValidationError({'mentor_id': 'A user cannot mentor their own objective'})

    @property
    def is_completed(self):
        return self.objetivo_status == self.ObjetivoStatus.CONCLUIDO
