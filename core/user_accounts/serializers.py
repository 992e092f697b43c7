import re

from django.contrib.auth.password_validation import validate_password
from django.core.validators import EmailValidator
from rest_framework import serializers

from core.security.roles import Role
from .models import CustomUser


def validate_password_strength(value):
    if len(value) < 8:
        raise serializers.ValidationError("Password must be at least 8 characters long")
    if not re.search(r'[A-Z]', value):
        raise serializers.ValidationError("Password must contain at least one uppercase letter")
    if not re.search(r'[a-z]', value):
        raise serializers.ValidationError("Password must contain at least one lowercase letter")
    if not re.search(r'\d', value):
        raise serializers.ValidationError("Password must contain at least one number")
    validate_password(value)
    return value


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Public sign-up. Always creates a colaborador."""
    password = serializers.CharField(write_only=True, required=True, style={'input_type': 'password'})
    confirm_password = serializers.CharField(write_only=True, required=True, style={'input_type': 'password'})

    class Meta:
        model = CustomUser
        fields = ['email', 'nome', 'password', 'confirm_password', 'data_admissao']

    def validate_email(self, value):
        EmailValidator(message="Enter a valid email address")(value)
        if CustomUser.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already registered")
        return value

    def validate_password(self, value):
        return validate_password_strength(value)

    def validate(self, attrs):
        if attrs['password'] != attrs['confirm_password']:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match"})
        return attrs

    def create(self, validated_data):
        validated_data.pop('confirm_password')
        return CustomUser.objects.create_user(
            email=validated_data['email'],
            nome=validated_data['nome'],
            password=validated_data['password'],
            role=Role.COLABORADOR,
            data_admissao=validated_data.get('data_admissao'),
        )


class ProfileSerializer(serializers.ModelSerializer):
    """
    Own profile. Role, status, supervisor and team are managed by admins
    and are read-only here.
    """
    gestor_id = serializers.IntegerField(read_only=True)
    gestor_nome = serializers.CharField(source='gestor.nome', read_only=True, allow_null=True, default=None)
    time_id = serializers.IntegerField(read_only=True)
    time_nome = serializers.CharField(source='time.nome', read_only=True, allow_null=True, default=None)

    class Meta:
        model = CustomUser
        fields = [
            'id', 'email', 'nome', 'role', 'status',
            'gestor_id', 'gestor_nome', 'time_id', 'time_nome', 'trilha',
            'data_admissao', 'data_desligamento',
            'bio', 'localizacao', 'formacao', 'avatar_url',
            'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'email', 'role', 'status', 'data_desligamento',
            'created_at', 'updated_at',
        ]


class UserListSerializer(serializers.ModelSerializer):
    """Admin listing."""
    gestor_id = serializers.IntegerField(read_only=True)
    time_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = CustomUser
        fields = ['id', 'email', 'nome', 'role', 'status', 'gestor_id', 'time_id', 'data_admissao']
        read_only_fields = fields


class RoleAssignmentSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Role.choices)


class SupervisorAssignmentSerializer(serializers.Serializer):
    gestor_id = serializers.IntegerField(allow_null=True)
