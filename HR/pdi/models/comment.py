from django.conf import settings
from django.db import models

from core.security.managers import PolicyScopedQuerySetMixin
from core.security.ownership import EntityClass


class PDICommentQuerySet(PolicyScopedQuerySetMixin, models.QuerySet):
    policy_entity_class = EntityClass.PDI_COMMENT


class PDIComment(models.Model):
    """Comment on an objective. Whoever can read the objective sees its comments."""
    objective = models.ForeignKey('pdi.PDIObjective', on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='pdi_comments')
    texto = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    objects = models.Manager.from_queryset(PDICommentQuerySet)()

    class Meta:
        db_table = 'pdi_comments'
        ordering = ['created_at']
