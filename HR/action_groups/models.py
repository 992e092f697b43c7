from django.conf import settings
from django.db import models

from core.base.models import AuditMixin
from core.security.managers import PolicyScopedQuerySetMixin
from core.security.ownership import EntityClass


class ActionGroupQuerySet(PolicyScopedQuerySetMixin, models.QuerySet):
    policy_entity_class = EntityClass.ACTION_GROUP

    def with_status(self, status):
        return self.filter(status=status)


class ActionGroup(AuditMixin, models.Model):
    """
    A working group with members and a task board.

    Visible to its creator and its members. Only the creator (or an admin)
    edits the group, its membership and its tasks.
    """

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Ativo'
        COMPLETED = 'completed', 'Concluído'
        ARCHIVED = 'archived', 'Arquivado'

    nome = models.CharField(max_length=128)
    descricao = models.TextField(blank=True, default='')
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.ACTIVE)

    objects = models.Manager.from_queryset(ActionGroupQuerySet)()

    class Meta:
        db_table = 'action_groups'
        ordering = ['-created_at']

    def __str__(self):
        return self.nome

    @property
    def member_ids(self):
        return [membership.user_id for membership in self.memberships.all()]


class ActionGroupMember(models.Model):
    group = models.ForeignKey(ActionGroup, on_delete=models.CASCADE, related_name='memberships')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='action_group_memberships'
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'action_group_members'
        unique_together = ('group', 'user')
        ordering = ['joined_at']


class ActionGroupTask(models.Model):
    class Status(models.TextChoices):
        TODO = 'todo', 'A fazer'
        DOING = 'doing', 'Em andamento'
        DONE = 'done', 'Concluída'

    group = models.ForeignKey(ActionGroup, on_delete=models.CASCADE, related_name='tasks')
    titulo = models.CharField(max_length=200)
    descricao = models.TextField(blank=True, default='')
    responsavel = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='action_group_tasks'
    )
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.TODO)
    data_limite = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'action_group_tasks'
        ordering = ['created_at']

    def __str__(self):
        return self.titulo

    @property
    def concluida(self):
        return self.status == self.Status.DONE
