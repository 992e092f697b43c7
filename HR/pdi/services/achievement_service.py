import logging

from django.db import transaction

from core.security.ownership import EntityClass
from core.security.services import AccessPolicyService
from HR.pdi.models import Achievement, PDIObjective

logger = logging.getLogger(__name__)


# (title, description, completed objectives needed)
ACHIEVEMENT_RULES = [
    ('Primeiro Objetivo', 'Completou seu primeiro objetivo PDI', 1),
    ('Aprendiz Dedicado', 'Completou 5 objetivos de aprendizado', 5),
]


class AchievementService:
    """Service for achievement unlocking and listing"""

    @staticmethod
    def list_for(data_source, actor, user_id=None):
        from HR.pdi.serializers import AchievementSerializer

        queryset = Achievement.objects.select_related('user', 'objective')
        if user_id:
            queryset = queryset.filter(user_id=user_id)
        return AccessPolicyService.read_visible(
            data_source,
            actor,
            EntityClass.ACHIEVEMENT,
            queryset,
            lambda rows: AchievementSerializer(rows, many=True).data,
        )

    @staticmethod
    @transaction.atomic
    def check_and_unlock(user, objective=None):
        """
        Unlock every achievement whose threshold the user's completed
        objective count has reached. Already unlocked titles are skipped.

        Returns:
            list of newly created Achievement rows
        """
        completed = PDIObjective.objects.filter(colaborador=user).completed().count()
        unlocked = []

        for titulo, descricao, threshold in ACHIEVEMENT_RULES:
            if completed < threshold:
                continue
            achievement, created = Achievement.objects.get_or_create(
                user=user,
                titulo=titulo,
                defaults={
                    'descricao': descricao,
                    'objective': objective if threshold == 1 else None,
                },
            )
            if created:
                logger.info("User %s unlocked achievement '%s'", user.pk, titulo)
                unlocked.append(achievement)
        return unlocked
