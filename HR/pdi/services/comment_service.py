import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from core.security.fallback import get_sample_data
from core.security.masking import mask
from core.security.ownership import EntityClass
from core.security.policy import filter_visible, same_actor
from core.security.roles import Operation
from core.security.services import AccessPolicyService, bind_sample_rows_to_actor
from HR.pdi.dtos import CommentCreateDTO
from HR.pdi.models import PDIComment
from HR.pdi.services.objective_service import ObjectiveService

logger = logging.getLogger(__name__)


class CommentService:
    """
    Comments follow their objective: whoever may read the objective may
    read and add comments. Only the author (or an admin) deletes one.
    """

    @staticmethod
    def list_for_objective(data_source, actor, objective_id):
        from HR.pdi.serializers import PDICommentSerializer

        def live_call():
            objective = ObjectiveService.get_visible(actor, objective_id)
            comments = objective.comments.select_related('user')
            return PDICommentSerializer(comments, many=True).data

        rows = data_source.read(live_call, EntityClass.PDI_COMMENT)
        if data_source.is_degraded:
            sample_objectives = bind_sample_rows_to_actor(
                get_sample_data(EntityClass.PDI_OBJECTIVE), EntityClass.PDI_OBJECTIVE, actor
            )
            sample_objectives = filter_visible(actor, sample_objectives, EntityClass.PDI_OBJECTIVE)
            if not any(same_actor(row.get('id'), objective_id) for row in sample_objectives):
                return []
            rows = [row for row in rows if same_actor(row.get('objective_id'), objective_id)]
        return mask(rows, actor, EntityClass.PDI_COMMENT)

    @staticmethod
    @transaction.atomic
    def create(actor, objective_id, dto: CommentCreateDTO) -> PDIComment:
        objective = ObjectiveService.get_visible(actor, objective_id)
        if not dto.texto or not dto.texto.strip():
            raise ValidationError({'texto': 'Comment cannot be empty'})

        comment = PDIComment(objective=objective, user=actor, texto=dto.texto.strip())
        AccessPolicyService.enforce(actor, EntityClass.PDI_COMMENT, comment, Operation.WRITE)
        comment.full_clean()
        comment.save()
        return comment

    @staticmethod
    @transaction.atomic
    def delete(actor, comment_id):
        try:
            comment = PDIComment.objects.select_related('user').get(pk=comment_id)
        except PDIComment.DoesNotExist:
            raise PDIComment.DoesNotExist(f"No comment with id {comment_id}")

        AccessPolicyService.enforce(
            actor, EntityClass.PDI_COMMENT, comment, Operation.DELETE,
            message="Only the author can delete this comment"
        )
        comment.delete()
        logger.info("Comment %s deleted by %s", comment_id, actor.pk)
