from rest_framework import serializers

from HR.assessment.dtos import ManagerAssessmentDTO, SelfAssessmentDTO
from HR.assessment.models import Assessment


class AssessmentSerializer(serializers.ModelSerializer):
    competency_id = serializers.IntegerField(read_only=True)
    competency_nome = serializers.CharField(source='competency.nome', read_only=True)
    competency_tipo = serializers.CharField(source='competency.tipo', read_only=True)
    avaliado_id = serializers.IntegerField(read_only=True)
    avaliado_nome = serializers.CharField(source='avaliado.nome', read_only=True)
    avaliador_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Assessment
        fields = [
            'id', 'competency_id', 'competency_nome', 'competency_tipo',
            'avaliado_id', 'avaliado_nome', 'avaliador_id',
            'tipo', 'nota', 'ciclo', 'comentario', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class SelfAssessmentSerializer(serializers.Serializer):
    competency_id = serializers.IntegerField()
    nota = serializers.DecimalField(max_digits=4, decimal_places=2, min_value=0, max_value=10)
    comentario = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    ciclo = serializers.CharField(max_length=20, required=False, allow_null=True)

    def to_dto(self) -> SelfAssessmentDTO:
        return SelfAssessmentDTO(**self.validated_data)


class ManagerAssessmentSerializer(SelfAssessmentSerializer):
    avaliado_id = serializers.IntegerField()

    def to_dto(self) -> ManagerAssessmentDTO:
        return ManagerAssessmentDTO(**self.validated_data)
