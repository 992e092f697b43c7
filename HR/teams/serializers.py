from rest_framework import serializers

from HR.teams.dtos import (
    FeedbackDTO,
    OneOnOneDTO,
    PerformanceReviewDTO,
    TeamCreateDTO,
    TeamUpdateDTO,
)
from HR.teams.models import Team, Touchpoint


class TeamSerializer(serializers.ModelSerializer):
    leader_id = serializers.IntegerField(read_only=True)
    leader_nome = serializers.CharField(source='leader.nome', read_only=True, allow_null=True, default=None)
    created_by_id = serializers.IntegerField(read_only=True)
    member_ids = serializers.SerializerMethodField()

    class Meta:
        model = Team
        fields = [
            'id', 'nome', 'descricao', 'leader_id', 'leader_nome',
            'created_by_id', 'member_ids', 'status', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_member_ids(self, obj):
        return sorted(obj.membros.values_list('id', flat=True))


class TeamCreateSerializer(serializers.Serializer):
    nome = serializers.CharField(max_length=128)
    descricao = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    leader_id = serializers.IntegerField(required=False, allow_null=True)
    member_ids = serializers.ListField(child=serializers.IntegerField(), required=False)

    def to_dto(self) -> TeamCreateDTO:
        return TeamCreateDTO(**self.validated_data)


class TeamUpdateSerializer(serializers.Serializer):
    nome = serializers.CharField(max_length=128, required=False)
    descricao = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    leader_id = serializers.IntegerField(required=False, allow_null=True)

    def to_dto(self) -> TeamUpdateDTO:
        return TeamUpdateDTO(**self.validated_data)


class TeamMemberSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()


class TouchpointSerializer(serializers.ModelSerializer):
    colaborador_id = serializers.IntegerField(read_only=True)
    colaborador_nome = serializers.CharField(source='colaborador.nome', read_only=True)
    gestor_id = serializers.IntegerField(read_only=True)
    gestor_nome = serializers.CharField(source='gestor.nome', read_only=True, allow_null=True, default=None)

    class Meta:
        model = Touchpoint
        fields = [
            'id', 'colaborador_id', 'colaborador_nome', 'gestor_id', 'gestor_nome',
            'tipo', 'ciclo', 'feedback', 'data_reuniao', 'created_at',
        ]
        read_only_fields = fields


class OneOnOneSerializer(serializers.Serializer):
    colaborador_id = serializers.IntegerField()
    data_reuniao = serializers.DateField()

    def to_dto(self) -> OneOnOneDTO:
        return OneOnOneDTO(**self.validated_data)


class FeedbackSerializer(serializers.Serializer):
    colaborador_id = serializers.IntegerField()
    feedback = serializers.CharField()

    def to_dto(self) -> FeedbackDTO:
        return FeedbackDTO(**self.validated_data)


class PerformanceReviewSerializer(serializers.Serializer):
    colaborador_id = serializers.IntegerField()
    feedback = serializers.CharField()
    data_reuniao = serializers.DateField(required=False, allow_null=True)

    def to_dto(self) -> PerformanceReviewDTO:
        return PerformanceReviewDTO(**self.validated_data)
