from django.conf import settings
from django.db import models

from core.base.managers import SoftDeleteQuerySet
from core.base.models import AuditMixin, SoftDeleteMixin
from core.security.managers import PolicyScopedQuerySetMixin
from core.security.ownership import EntityClass
from HR.assessment.models import current_cycle


class TeamQuerySet(PolicyScopedQuerySetMixin, SoftDeleteQuerySet):
    policy_entity_class = EntityClass.TEAM


class Team(SoftDeleteMixin, AuditMixin, models.Model):
    """
    A team led by one user.

    Membership lives on the user (``CustomUser.time``), so a user belongs to
    at most one team at a time.
    """
    nome = models.CharField(max_length=128)
    descricao = models.TextField(blank=True, default='')
    leader = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='teams_led'
    )

    objects = models.Manager.from_queryset(TeamQuerySet)()

    class Meta:
        db_table = 'teams'
        ordering = ['nome']

    def __str__(self):
        return self.nome

    @property
    def member_ids(self):
        return list(self.membros.values_list('id', flat=True))


class TouchpointQuerySet(PolicyScopedQuerySetMixin, models.QuerySet):
    policy_entity_class = EntityClass.TOUCHPOINT

    def for_colaborador(self, user_id):
        return self.filter(colaborador_id=user_id)


class Touchpoint(models.Model):
    """
    A manager's one-on-one, feedback note or performance review about a
    direct report. Recorded by the gestor, readable by the colaborador.
    """

    class Tipo(models.TextChoices):
        ONE_ON_ONE = 'one_on_one', 'Reunião 1:1'
        FEEDBACK = 'feedback', 'Feedback'
        PERFORMANCE_REVIEW = 'performance_review', 'Avaliação de desempenho'

    colaborador = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='touchpoints'
    )
    gestor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='touchpoints_given'
    )
    tipo = models.CharField(max_length=20, choices=Tipo.choices)
    ciclo = models.CharField(max_length=10, default=current_cycle)
    feedback = models.TextField(blank=True, default='')
    data_reuniao = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = models.Manager.from_queryset(TouchpointQuerySet)()

    class Meta:
        db_table = 'touchpoints'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.get_tipo_display()} - {self.colaborador_id}'
