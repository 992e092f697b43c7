"""
Serializers for PDI objectives, comments and achievements
"""
from rest_framework import serializers

from HR.pdi.dtos import (
    CommentCreateDTO,
    ObjectiveCreateDTO,
    ObjectiveEvaluationDTO,
    ObjectiveUpdateDTO,
)
from HR.pdi.models import Achievement, PDIComment, PDIObjective


class PDIObjectiveSerializer(serializers.ModelSerializer):
    """Read serializer for PDIObjective"""
    colaborador_id = serializers.IntegerField(read_only=True)
    colaborador_nome = serializers.CharField(source='colaborador.nome', read_only=True)
    competency_id = serializers.IntegerField(read_only=True)
    competency_nome = serializers.CharField(source='competency.nome', read_only=True, allow_null=True, default=None)
    mentor_id = serializers.IntegerField(read_only=True)
    mentor_nome = serializers.CharField(source='mentor.nome', read_only=True, allow_null=True, default=None)
    created_by_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = PDIObjective
        fields = [
            'id', 'colaborador_id', 'colaborador_nome',
            'competency_id', 'competency_nome', 'mentor_id', 'mentor_nome',
            'titulo', 'descricao', 'status', 'objetivo_status',
            'progresso', 'pontos_extra', 'data_inicio', 'data_fim',
            'created_by_id', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ObjectiveCreateSerializer(serializers.Serializer):
    titulo = serializers.CharField(max_length=255)
    descricao = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    colaborador_id = serializers.IntegerField(required=False, allow_null=True)
    competency_id = serializers.IntegerField(required=False, allow_null=True)
    mentor_id = serializers.IntegerField(required=False, allow_null=True)
    data_inicio = serializers.DateField(required=False, allow_null=True)
    data_fim = serializers.DateField(required=False, allow_null=True)

    def validate(self, attrs):
        if attrs.get('data_inicio') and attrs.get('data_fim') and attrs['data_fim'] < attrs['data_inicio']:
            raise serializers.ValidationError({'data_fim': 'End date cannot be before start date'})
        return attrs

    def to_dto(self) -> ObjectiveCreateDTO:
        return ObjectiveCreateDTO(**self.validated_data)


class ObjectiveUpdateSerializer(serializers.Serializer):
    titulo = serializers.CharField(max_length=255, required=False)
    descricao = serializers.CharField(required=False, allow_blank=True)
    competency_id = serializers.IntegerField(required=False)
    mentor_id = serializers.IntegerField(required=False)
    data_inicio = serializers.DateField(required=False)
    data_fim = serializers.DateField(required=False)
    objetivo_status = serializers.ChoiceField(choices=PDIObjective.ObjetivoStatus.choices, required=False)
    progresso = serializers.IntegerField(min_value=0, max_value=100, required=False)

    def to_dto(self) -> ObjectiveUpdateDTO:
        return ObjectiveUpdateDTO(**self.validated_data)


class ObjectiveEvaluationSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[
            PDIObjective.Status.APROVADO,
            PDIObjective.Status.REJEITADO,
            PDIObjective.Status.PROPOSTO_GESTOR,
        ],
        required=False
    )
    pontos_extra = serializers.IntegerField(min_value=0, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide status and/or pontos_extra")
        return attrs

    def to_dto(self) -> ObjectiveEvaluationDTO:
        return ObjectiveEvaluationDTO(**self.validated_data)


class PDICommentSerializer(serializers.ModelSerializer):
    objective_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    user_nome = serializers.CharField(source='user.nome', read_only=True)

    class Meta:
        model = PDIComment
        fields = ['id', 'objective_id', 'user_id', 'user_nome', 'texto', 'created_at']
        read_only_fields = fields


class CommentCreateSerializer(serializers.Serializer):
    texto = serializers.CharField()

    def to_dto(self) -> CommentCreateDTO:
        return CommentCreateDTO(**self.validated_data)


class AchievementSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    user_nome = serializers.CharField(source='user.nome', read_only=True)
    objective_id = serializers.IntegerField(read_only=True)
    objective_titulo = serializers.CharField(source='objective.titulo', read_only=True, allow_null=True, default=None)

    class Meta:
        model = Achievement
        fields = [
            'id', 'user_id', 'user_nome', 'titulo', 'descricao',
            'conquistado_em', 'objective_id', 'objective_titulo'
        ]
        read_only_fields = fields


class MentorSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    nome = serializers.CharField()
    role = serializers.CharField()
