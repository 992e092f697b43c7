"""
Career services: track configuration, competencies and salary history.

Tracks and competencies are reference data. Changing them is evaluated
against the admin-only track-configuration class.
"""
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction

from core.base.models import StatusChoices
from core.security.ownership import EntityClass
from core.security.roles import Operation
from core.security.services import AccessPolicyService
from HR.career.dtos import (
    CareerTrackCreateDTO,
    CareerTrackUpdateDTO,
    CompetencyCreateDTO,
    SalaryRecordCreateDTO,
)
from HR.career.models import CareerStage, CareerTrack, Competency, SalaryHistory

logger = logging.getLogger(__name__)

COMPETENCY_DATASET = 'competency'

User = get_user_model()


class CareerTrackService:
    """Service for career track business logic"""

    @staticmethod
    def list_tracks(data_source):
        from HR.career.serializers import CareerTrackSerializer
        return data_source.read(
            lambda: CareerTrackSerializer(
                CareerTrack.objects.active().prefetch_related('stages'), many=True
            ).data,
            EntityClass.TRACK_CONFIGURATION,
        )

    @staticmethod
    @transaction.atomic
    def create(user, dto: CareerTrackCreateDTO) -> CareerTrack:
        """
        Create a track with its stages.

        Validates:
        - Only admins configure tracks
        - Name is unique
        - At most one final stage
        """
        track = CareerTrack(nome=dto.nome, descricao=dto.descricao or '', created_by=user, updated_by=user)
        AccessPolicyService.enforce(
            user, EntityClass.TRACK_CONFIGURATION, track, Operation.WRITE,
            message="Only administrators can configure career tracks"
        )

        if CareerTrack.objects.filter(nome__iexact=dto.nome).exists():
            raise ValidationError({'nome': f'Career track "{dto.nome}" already exists'})
        if sum(1 for stage in dto.stages if stage.is_final) > 1:
            raise ValidationError({'stages': 'A track can have only one final stage'})

        track.full_clean()
        track.save()

        for stage in dto.stages:
            CareerStage.objects.create(
                trilha=track,
                fase=stage.fase,
                titulo=stage.titulo,
                ordem=stage.ordem,
                is_final=stage.is_final,
            )
        return track

    @staticmethod
    @transaction.atomic
    def update(user, track_id, dto: CareerTrackUpdateDTO) -> CareerTrack:
        try:
            track = CareerTrack.objects.active().get(pk=track_id)
        except CareerTrack.DoesNotExist:
            raise ValidationError(f"No active career track with id {track_id}")

        AccessPolicyService.enforce(
            user, EntityClass.TRACK_CONFIGURATION, track, Operation.WRITE,
            message="Only administrators can configure career tracks"
        )

        field_updates = {}
        if dto.nome is not None:
            if CareerTrack.objects.filter(nome__iexact=dto.nome).exclude(pk=track.pk).exists():
                raise ValidationError({'nome': f'Career track "{dto.nome}" already exists'})
            field_updates['nome'] = dto.nome
        if dto.descricao is not None:
            field_updates['descricao'] = dto.descricao

        if field_updates:
            field_updates['updated_by'] = user
            track.update_fields(field_updates)
        return track

    @staticmethod
    @transaction.atomic
    def deactivate(user, track_id) -> CareerTrack:
        try:
            track = CareerTrack.objects.active().get(pk=track_id)
        except CareerTrack.DoesNotExist:
            raise ValidationError(f"No active career track with id {track_id}")

        AccessPolicyService.enforce(
            user, EntityClass.TRACK_CONFIGURATION, track, Operation.DELETE,
            message="Only administrators can configure career tracks"
        )
        if track.colaboradores.filter(status=StatusChoices.ATIVO).exists():
            raise ValidationError("Cannot deactivate a track that active users are following")

        track.deactivate()
        return track


class CompetencyService:
    """Service for competency reference data"""

    @staticmethod
    def list_competencies(data_source, tipo=None, stage_id=None):
        from HR.career.serializers import CompetencySerializer

        def live_call():
            competencies = Competency.objects.select_related('stage')
            if tipo:
                competencies = competencies.filter(tipo=tipo)
            if stage_id:
                competencies = competencies.filter(stage_id=stage_id)
            return CompetencySerializer(competencies, many=True).data

        return data_source.read(live_call, COMPETENCY_DATASET)

    @staticmethod
    @transaction.atomic
    def create(user, dto: CompetencyCreateDTO) -> Competency:
        competency = Competency(nome=dto.nome, tipo=dto.tipo, descricao=dto.descricao or '')
        AccessPolicyService.enforce(
            user, EntityClass.TRACK_CONFIGURATION, competency, Operation.WRITE,
            message="Only administrators can configure competencies"
        )

        if dto.stage_id is not None:
            try:
                competency.stage = CareerStage.objects.get(pk=dto.stage_id)
            except CareerStage.DoesNotExist:
                raise ValidationError({'stage_id': 'Career stage not found'})

        competency.full_clean()
        competency.save()
        return competency


class SalaryHistoryService:
    """Service for salary records"""

    @staticmethod
    def list_for(data_source, actor, user_id=None):
        from HR.career.serializers import SalaryHistorySerializer

        queryset = SalaryHistory.objects.select_related('user')
        if user_id:
            queryset = queryset.filter(user_id=user_id)
        return AccessPolicyService.read_visible(
            data_source,
            actor,
            EntityClass.SALARY_RECORD,
            queryset,
            lambda rows: SalaryHistorySerializer(rows, many=True).data,
        )

    @staticmethod
    @transaction.atomic
    def create(actor, dto: SalaryRecordCreateDTO) -> SalaryHistory:
        try:
            user = User.objects.get(pk=dto.user_id)
        except User.DoesNotExist:
            raise ValidationError({'user_id': 'User not found'})

        record = SalaryHistory(
            user=user,
            cargo=dto.cargo or '',
            valor=dto.valor,
            data_inicio=dto.data_inicio,
            data_fim=dto.data_fim,
            motivo=dto.motivo or '',
        )
        AccessPolicyService.enforce(
            actor, EntityClass.SALARY_RECORD, record, Operation.WRITE,
            message="You do not have permission to record salaries"
        )

        # close the open record
        SalaryHistory.objects.filter(
            user=user, data_fim__isnull=True, data_inicio__lt=dto.data_inicio
        ).update(data_fim=dto.data_inicio)

        record.full_clean()
        record.save()
        logger.info("Salary record %s created for user %s by %s", record.pk, user.pk, actor.pk)
        return record
