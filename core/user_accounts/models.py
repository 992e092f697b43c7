"""
User Account Models

The account is the policy Actor: it carries the role, the ativo/inativo
status and the one-level supervisor pointer the access rules read.
Accounts are never deleted; leaving the company deactivates them.
"""
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import models
from django.utils import timezone

from core.base.managers import BaseQuerySet
from core.base.models import StatusChoices
from core.security.managers import PolicyScopedQuerySetMixin
from core.security.ownership import EntityClass
from core.security.roles import Role


class CustomUserQuerySet(PolicyScopedQuerySetMixin, BaseQuerySet):
    policy_entity_class = EntityClass.PROFILE
    search_fields = ('nome', 'email')

    def active(self):
        return self.filter(status=StatusChoices.ATIVO)

    def with_role(self, *roles):
        return self.filter(role__in=roles)

    def reports_of(self, user):
        """Direct reports only; the hierarchy is one level deep."""
        return self.filter(gestor=user)


class CustomUserManager(BaseUserManager.from_queryset(CustomUserQuerySet)):
    """
    Manager for CustomUser.

    Public sign-ups always get the colaborador role; other roles are assigned
    later by an administrator.
    """

    def create_user(self, email, nome, password=None, role=Role.COLABORADOR, **extra_fields):
        """
        Create and save an account.

        Args:
            email: Login email
            nome: Full name
            password: Raw password (hashed before saving)
            role: One of Role.*
            **extra_fields: Other model fields (gestor, data_admissao, ...)
        """
        if not email:
            raise ValueError('Email is required')
        if not nome:
            raise ValueError('Nome is required')
        if role not in Role.values:
            raise ValueError(f'Unknown role: {role}')

        user = self.model(
            email=self.normalize_email(email),
            nome=nome,
            role=role,
            **extra_fields
        )
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, nome, password=None, **extra_fields):
        """Required by Django's createsuperuser command."""
        return self.create_user(
            email=email,
            nome=nome,
            password=password,
            role=Role.ADMIN,
            **extra_fields
        )


class CustomUser(AbstractBaseUser):
    """Employee account with email authentication."""
    email = models.EmailField(unique=True, db_index=True)
    nome = models.CharField(max_length=255)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.COLABORADOR)
    status = models.CharField(max_length=10, choices=StatusChoices.choices, default=StatusChoices.ATIVO)

    gestor = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='subordinados',
        help_text="Direct supervisor"
    )
    time = models.ForeignKey(
        'teams.Team',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='membros',
        help_text="The one team this account belongs to"
    )
    trilha = models.ForeignKey(
        'career.CareerTrack',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='colaboradores',
    )

    data_admissao = models.DateField(null=True, blank=True)
    data_desligamento = models.DateField(null=True, blank=True)
    bio = models.TextField(blank=True, default='')
    localizacao = models.CharField(max_length=255, blank=True, default='')
    formacao = models.CharField(max_length=255, blank=True, default='')
    avatar_url = models.URLField(blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['nome']

    class Meta:
        db_table = 'profiles'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['nome']

    def __str__(self):
        return f"{self.nome} ({self.email})"

    @property
    def is_active(self):
        """Inactive accounts cannot authenticate."""
        return self.status == StatusChoices.ATIVO

    def is_admin(self):
        return self.role == Role.ADMIN

    def is_rh(self):
        return self.role == Role.RH

    def is_gestor(self):
        return self.role == Role.GESTOR

    def clean(self):
        if self.pk and self.gestor_id == self.pk:
            raise ValidationError({'gestor': 'A user cannot supervise themselves'})

    def deactivate(self, when=None):
        """Soft delete: flip status and record the leaving date."""
        self.status = StatusChoices.INATIVO
        self.data_desligamento = when or timezone.now().date()
        self.save(update_fields=['status', 'data_desligamento', 'updated_at'])

    def delete(self, *args, **kwargs):
        raise PermissionDenied(
            "Accounts cannot be deleted. Deactivate the account instead."
        )
