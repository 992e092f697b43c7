from django.conf import settings
from django.db import models
from django.utils import timezone

from core.security.managers import PolicyScopedQuerySetMixin
from core.security.ownership import EntityClass


class AchievementQuerySet(PolicyScopedQuerySetMixin, models.QuerySet):
    policy_entity_class = EntityClass.ACHIEVEMENT


class Achievement(models.Model):
    """An unlocked achievement. Each title is unlocked at most once per user."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='achievements')
    titulo = models.CharField(max_length=128)
    descricao = models.TextField(blank=True, default='')
    conquistado_em = models.DateTimeField(default=timezone.now)
    objective = models.ForeignKey(
        'pdi.PDIObjective',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='achievements'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )

    objects = models.Manager.from_queryset(AchievementQuerySet)()

    class Meta:
        db_table = 'achievements'
        ordering = ['-conquistado_em']
        unique_together = [('user', 'titulo')]
