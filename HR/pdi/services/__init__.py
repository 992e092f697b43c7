from .achievement_service import AchievementService
from .objective_service import ObjectiveService
from .comment_service import CommentService

__all__ = [
    'AchievementService',
    'ObjectiveService',
    'CommentService',
]
