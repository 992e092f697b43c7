from rest_framework import serializers

from HR.action_groups.dtos import (
    ActionGroupCreateDTO,
    ActionGroupUpdateDTO,
    TaskCreateDTO,
    TaskUpdateDTO,
)
from HR.action_groups.models import ActionGroup, ActionGroupTask


class ActionGroupSerializer(serializers.ModelSerializer):
    created_by_id = serializers.IntegerField(read_only=True)
    created_by_nome = serializers.CharField(source='created_by.nome', read_only=True, allow_null=True, default=None)
    member_ids = serializers.SerializerMethodField()
    member_count = serializers.SerializerMethodField()
    task_count = serializers.SerializerMethodField()
    completed_tasks = serializers.SerializerMethodField()
    progress = serializers.SerializerMethodField()

    class Meta:
        model = ActionGroup
        fields = [
            'id', 'nome', 'descricao', 'status', 'created_by_id', 'created_by_nome',
            'member_ids', 'member_count', 'task_count', 'completed_tasks', 'progress',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_member_ids(self, obj):
        return sorted(obj.member_ids)

    def get_member_count(self, obj):
        return len(obj.member_ids)

    def get_task_count(self, obj):
        return len(obj.tasks.all())

    def get_completed_tasks(self, obj):
        return sum(1 for task in obj.tasks.all() if task.concluida)

    def get_progress(self, obj):
        """Percentage of done tasks, rounded down."""
        total = self.get_task_count(obj)
        if not total:
            return 0
        return self.get_completed_tasks(obj) * 100 // total


class ActionGroupCreateSerializer(serializers.Serializer):
    nome = serializers.CharField(max_length=128)
    descricao = serializers.CharField(required=False, allow_blank=True)
    member_ids = serializers.ListField(child=serializers.IntegerField(), required=False)

    def to_dto(self) -> ActionGroupCreateDTO:
        return ActionGroupCreateDTO(**self.validated_data)


class ActionGroupUpdateSerializer(serializers.Serializer):
    nome = serializers.CharField(max_length=128, required=False)
    descricao = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=ActionGroup.Status.choices, required=False)

    def to_dto(self) -> ActionGroupUpdateDTO:
        return ActionGroupUpdateDTO(**self.validated_data)


class ActionGroupMemberSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()


class ActionGroupTaskSerializer(serializers.ModelSerializer):
    group_id = serializers.IntegerField(read_only=True)
    responsavel_id = serializers.IntegerField(read_only=True, allow_null=True)
    responsavel_nome = serializers.CharField(source='responsavel.nome', read_only=True, allow_null=True, default=None)
    concluida = serializers.BooleanField(read_only=True)

    class Meta:
        model = ActionGroupTask
        fields = [
            'id', 'group_id', 'titulo', 'descricao', 'responsavel_id', 'responsavel_nome',
            'status', 'concluida', 'data_limite', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class TaskCreateSerializer(serializers.Serializer):
    titulo = serializers.CharField(max_length=200)
    descricao = serializers.CharField(required=False, allow_blank=True)
    responsavel_id = serializers.IntegerField(required=False, allow_null=True)
    data_limite = serializers.DateField(required=False, allow_null=True)

    def to_dto(self) -> TaskCreateDTO:
        return TaskCreateDTO(**self.validated_data)


class TaskUpdateSerializer(serializers.Serializer):
    titulo = serializers.CharField(max_length=200, required=False)
    status = serializers.ChoiceField(choices=ActionGroupTask.Status.choices, required=False)
    responsavel_id = serializers.IntegerField(required=False, allow_null=True)
    data_limite = serializers.DateField(required=False, allow_null=True)

    def to_dto(self) -> TaskUpdateDTO:
        return TaskUpdateDTO(**self.validated_data)
