from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.base.models import AuditMixin
from core.security.managers import PolicyScopedQuerySetMixin
from core.security.ownership import EntityClass, Sensitivity


class HRRecordQuerySet(PolicyScopedQuerySetMixin, models.QuerySet):
    policy_entity_class = EntityClass.HR_RECORD


class HRTestQuerySet(PolicyScopedQuerySetMixin, models.QuerySet):
    policy_entity_class = EntityClass.HR_TEST

    def pending(self):
        return self.filter(completed_at__isnull=True)


class HRRecord(AuditMixin, models.Model):
    """
    Session notes and follow-ups written by rh about one user.

    Confidential by default: only rh and the subject see who it is about.
    """

    class Tipo(models.TextChoices):
        SESSAO = 'sessao', 'Sessão individual'
        ACOMPANHAMENTO = 'acompanhamento', 'Acompanhamento'
        TESTE = 'teste', 'Teste'
        SESSAO_GRUPO = 'sessao_grupo', 'Sessão em grupo'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='hr_records')
    tipo = models.CharField(max_length=20, choices=Tipo.choices, default=Tipo.SESSAO)
    titulo = models.CharField(max_length=200)
    conteudo = models.TextField(blank=True, default='')
    data_sessao = models.DateTimeField(null=True, blank=True)
    sensitivity = models.CharField(
        max_length=15,
        choices=Sensitivity.choices,
        default=Sensitivity.CONFIDENTIAL
    )

    objects = models.Manager.from_queryset(HRRecordQuerySet)()

    class Meta:
        db_table = 'hr_records'
        ordering = ['-created_at']

    def __str__(self):
        return self.titulo


class HRTest(models.Model):
    class TestType(models.TextChoices):
        BURNOUT = 'burnout', 'Burnout'
        STRESS = 'stress', 'Estresse'
        WELLBEING = 'wellbeing', 'Bem-estar'
        SATISFACTION = 'satisfaction', 'Satisfação'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='hr_tests')
    administered_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='hr_tests_administered'
    )
    test_type = models.CharField(max_length=20, choices=TestType.choices)
    questions = models.JSONField(default=dict, blank=True)
    answers = models.JSONField(null=True, blank=True)
    score = models.DecimalField(
        max_digits=4,
        decimal_places=1,
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(10)]
    )
    interpretation = models.CharField(max_length=100, blank=True, default='')
    completed_at = models.DateTimeField(null=True, blank=True)
    sensitivity = models.CharField(
        max_length=15,
        choices=Sensitivity.choices,
        default=Sensitivity.CONFIDENTIAL
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = models.Manager.from_queryset(HRTestQuerySet)()

    class Meta:
        db_table = 'hr_tests'
        ordering = ['-created_at']

    @property
    def is_completed(self):
        return self.completed_at is not None
