"""
Serializers for career tracks, competencies and salary history
"""
from rest_framework import serializers

from HR.career.dtos import (
    CareerStageDTO,
    CareerTrackCreateDTO,
    CareerTrackUpdateDTO,
    CompetencyCreateDTO,
    SalaryRecordCreateDTO,
)
from HR.career.models import CareerStage, CareerTrack, Competency, SalaryHistory


class CareerStageSerializer(serializers.ModelSerializer):
    class Meta:
        model = CareerStage
        fields = ['id', 'fase', 'titulo', 'ordem', 'is_final']


class CareerTrackSerializer(serializers.ModelSerializer):
    """Read serializer for a track and its ordered stages"""
    stages = CareerStageSerializer(many=True, read_only=True)

    class Meta:
        model = CareerTrack
        fields = ['id', 'nome', 'descricao', 'status', 'stages', 'created_at', 'updated_at']
        read_only_fields = fields


class CareerStageInputSerializer(serializers.Serializer):
    titulo = serializers.CharField(max_length=128)
    ordem = serializers.IntegerField(min_value=1)
    fase = serializers.ChoiceField(choices=CareerStage.Fase.choices, required=False)
    is_final = serializers.BooleanField(required=False)


class CareerTrackCreateSerializer(serializers.Serializer):
    nome = serializers.CharField(max_length=128)
    descricao = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    stages = CareerStageInputSerializer(many=True, required=False)

    def validate_stages(self, value):
        orders = [stage['ordem'] for stage in value]
        if len(orders) != len(set(orders)):
            raise serializers.ValidationError("Stage order values must be unique")
        return value

    def to_dto(self) -> CareerTrackCreateDTO:
        data = dict(self.validated_data)
        stages = [CareerStageDTO(**stage) for stage in data.pop('stages', [])]
        return CareerTrackCreateDTO(stages=stages, **data)


class CareerTrackUpdateSerializer(serializers.Serializer):
    nome = serializers.CharField(max_length=128, required=False)
    descricao = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def to_dto(self) -> CareerTrackUpdateDTO:
        return CareerTrackUpdateDTO(**self.validated_data)


class CompetencySerializer(serializers.ModelSerializer):
    stage_id = serializers.IntegerField(read_only=True)
    stage_titulo = serializers.CharField(source='stage.titulo', read_only=True, allow_null=True, default=None)

    class Meta:
        model = Competency
        fields = ['id', 'nome', 'tipo', 'descricao', 'stage_id', 'stage_titulo']
        read_only_fields = fields


class CompetencyCreateSerializer(serializers.Serializer):
    nome = serializers.CharField(max_length=128)
    tipo = serializers.ChoiceField(choices=Competency.Tipo.choices)
    stage_id = serializers.IntegerField(required=False, allow_null=True)
    descricao = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def to_dto(self) -> CompetencyCreateDTO:
        return CompetencyCreateDTO(**self.validated_data)


class SalaryHistorySerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    user_nome = serializers.CharField(source='user.nome', read_only=True)

    class Meta:
        model = SalaryHistory
        fields = [
            'id', 'user_id', 'user_nome', 'cargo', 'valor',
            'data_inicio', 'data_fim', 'motivo', 'created_at'
        ]
        read_only_fields = fields


class SalaryRecordCreateSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    valor = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    data_inicio = serializers.DateField()
    cargo = serializers.CharField(max_length=128, required=False, allow_blank=True, allow_null=True)
    data_fim = serializers.DateField(required=False, allow_null=True)
    motivo = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        if attrs.get('data_fim') and attrs['data_fim'] < attrs['data_inicio']:
            raise serializers.ValidationError({'data_fim': 'End date cannot be before start date'})
        return attrs

    def to_dto(self) -> SalaryRecordCreateDTO:
        return SalaryRecordCreateDTO(**self.validated_data)
