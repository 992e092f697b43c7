from rest_framework import serializers

from core.security.ownership import Sensitivity
from HR.wellness.dtos import HRRecordCreateDTO, HRRecordUpdateDTO, HRTestCompleteDTO, HRTestCreateDTO
from HR.wellness.models import HRRecord, HRTest


class HRRecordSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    user_nome = serializers.CharField(source='user.nome', read_only=True)
    created_by_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = HRRecord
        fields = [
            'id', 'user_id', 'user_nome', 'tipo', 'titulo', 'conteudo',
            'data_sessao', 'sensitivity', 'created_by_id', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class HRRecordCreateSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    titulo = serializers.CharField(max_length=200)
    tipo = serializers.ChoiceField(choices=HRRecord.Tipo.choices, required=False)
    conteudo = serializers.CharField(required=False, allow_blank=True)
    data_sessao = serializers.DateTimeField(required=False, allow_null=True)
    sensitivity = serializers.ChoiceField(choices=Sensitivity.choices, required=False)

    def to_dto(self) -> HRRecordCreateDTO:
        return HRRecordCreateDTO(**self.validated_data)


class HRRecordUpdateSerializer(serializers.Serializer):
    titulo = serializers.CharField(max_length=200, required=False)
    tipo = serializers.ChoiceField(choices=HRRecord.Tipo.choices, required=False)
    conteudo = serializers.CharField(required=False, allow_blank=True)
    data_sessao = serializers.DateTimeField(required=False, allow_null=True)
    sensitivity = serializers.ChoiceField(choices=Sensitivity.choices, required=False)

    def to_dto(self) -> HRRecordUpdateDTO:
        return HRRecordUpdateDTO(**self.validated_data)


class HRTestSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    user_nome = serializers.CharField(source='user.nome', read_only=True)
    administered_by_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = HRTest
        fields = [
            'id', 'user_id', 'user_nome', 'administered_by_id', 'test_type',
            'questions', 'answers', 'score', 'interpretation', 'completed_at',
            'sensitivity', 'created_at',
        ]
        read_only_fields = fields


class HRTestCreateSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    test_type = serializers.ChoiceField(choices=HRTest.TestType.choices)
    questions = serializers.DictField(required=False)

    def to_dto(self) -> HRTestCreateDTO:
        return HRTestCreateDTO(**self.validated_data)


class HRTestCompleteSerializer(serializers.Serializer):
    answers = serializers.DictField()

    def validate_answers(self, value):
        if not value:
            raise serializers.ValidationError("At least one answer is required")
        return value

    def to_dto(self) -> HRTestCompleteDTO:
        return HRTestCompleteDTO(**self.validated_data)
