from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from core.security.managers import PolicyScopedQuerySetMixin
from core.security.ownership import EntityClass


def current_cycle():
    return str(timezone.now().year)


class AssessmentQuerySet(PolicyScopedQuerySetMixin, models.QuerySet):
    policy_entity_class = EntityClass.ASSESSMENT

    def for_cycle(self, ciclo):
        return self.filter(ciclo=ciclo)


class Assessment(models.Model):
    """
    A score (0..10) for one competency of one user in one cycle.

    Self-assessments have avaliador == avaliado; manager assessments are
    written by the direct supervisor.
    """

    class Tipo(models.TextChoices):
        AUTOAVALIACAO = 'autoavaliacao', 'Autoavaliação'
        GESTOR = 'gestor', 'Avaliação do gestor'

    competency = models.ForeignKey('career.Competency', on_delete=models.CASCADE, related_name='assessments')
    avaliado = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='assessments_received'
    )
    avaliador = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='assessments_given'
    )
    tipo = models.CharField(max_length=15, choices=Tipo.choices)
    nota = models.DecimalField(
        max_digits=4,
        decimal_places=2,
        validators=[MinValueValidator(0), MaxValueValidator(10)]
    )
    ciclo = models.CharField(max_length=20, default=current_cycle)
    comentario = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = models.Manager.from_queryset(AssessmentQuerySet)()

    class Meta:
        db_table = 'assessments'
        ordering = ['-updated_at']
        unique_together = [('competency', 'avaliado', 'tipo', 'ciclo')]
