"""
API Views for authentication, own profile and account administration.
"""
import logging

from django.contrib.auth import authenticate
from django.core.exceptions import PermissionDenied, ValidationError
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from core.security.decorators import require_active, require_roles
from core.security.middleware import get_data_source
from core.security.roles import Role
from pdi_project.pagination import auto_paginate
from .models import CustomUser
from .serializers import (
    ProfileSerializer,
    RoleAssignmentSerializer,
    SupervisorAssignmentSerializer,
    UserListSerializer,
    UserRegistrationSerializer,
)
from .services import UserAccountService

logger = logging.getLogger(__name__)


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token)
    }


def _validation_error_response(e):
    return Response(
        {'error': e.message_dict if hasattr(e, 'message_dict') else str(e)},
        status=status.HTTP_400_BAD_REQUEST
    )


# ============================================================================
# Public Authentication Views
# ============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """
    Public sign-up. New accounts get the colaborador role.

    POST /auth/register/
    - Request body: { "email", "nome", "password", "confirm_password", "data_admissao"? }
    - Returns: User data and JWT tokens
    """
    serializer = UserRegistrationSerializer(data=request.data)

    if serializer.is_valid():
        user = serializer.save()
        return Response({
            'message': 'User registered successfully',
            'user': ProfileSerializer(user).data,
            'tokens': _tokens_for(user)
        }, status=status.HTTP_201_CREATED)

    logger.debug("Registration rejected: %s", serializer.errors)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """
    POST /auth/login/
    - Request body: { "email": "...", "password": "..." }
    - Returns: User data and JWT tokens

    Deactivated accounts are rejected like bad credentials.
    """
    email = request.data.get('email')
    password = request.data.get('password')

    if not email or not password:
        return Response(
            {'error': 'Please provide both email and password'},
            status=status.HTTP_400_BAD_REQUEST
        )

    user = authenticate(request, username=email, password=password)

    if user is None:
        return Response(
            {'error': 'Invalid credentials'},
            status=status.HTTP_401_UNAUTHORIZED
        )

    return Response({
        'message': 'Login successful',
        'user': ProfileSerializer(user).data,
        'tokens': _tokens_for(user)
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """
    Blacklist the refresh token.

    POST /auth/logout/
    - Request body: { "refresh": "..." }
    """
    refresh_token = request.data.get('refresh')
    if not refresh_token:
        return Response(
            {'error': 'Refresh token is required'},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        RefreshToken(refresh_token).blacklist()
    except TokenError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'message': 'Logout successful'}, status=status.HTTP_200_OK)


# ============================================================================
# Own Profile
# ============================================================================

@api_view(['GET', 'PATCH'])
@require_active
def user_profile(request):
    """
    GET   /accounts/profile/
    PATCH /accounts/profile/
    - Request body: any of { "nome", "bio", "localizacao", "formacao", "avatar_url",
      "data_admissao", "trilha" }
    """
    user = request.user

    if request.method == 'GET':
        return Response(ProfileSerializer(user).data, status=status.HTTP_200_OK)

    serializer = ProfileSerializer(user, data=request.data, partial=True)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = UserAccountService.update_profile(request.user, user, serializer.validated_data)
    except ValidationError as e:
        return _validation_error_response(e)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response({
        'message': 'Profile updated successfully',
        'user': ProfileSerializer(user).data
    }, status=status.HTTP_200_OK)


# ============================================================================
# Admin Account Management
# ============================================================================

@api_view(['GET'])
@require_roles(Role.ADMIN)
@auto_paginate
def admin_user_list(request):
    """
    GET /accounts/admin/users/?role=gestor&search=silva
    """
    users = UserAccountService.list_users(get_data_source(request), request.user, request.query_params)

    role = request.query_params.get('role')
    if role:
        users = [u for u in users if u.get('role') == role]
    return Response(users, status=status.HTTP_200_OK)


def _get_target(user_id):
    try:
        return CustomUser.objects.get(pk=user_id)
    except CustomUser.DoesNotExist:
        return None


def _not_found():
    return Response({'error': 'User not found'}, status=status.HTTP_404_NOT_FOUND)


@api_view(['POST'])
@require_active
def admin_user_role(request, user_id):
    """
    Assign a role (admin only).

    POST /accounts/admin/users/<id>/role/
    - Request body: { "role": "gestor" }
    """
    target = _get_target(user_id)
    if target is None:
        return _not_found()

    serializer = RoleAssignmentSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        target = UserAccountService.assign_role(request.user, target, serializer.validated_data['role'])
    except ValidationError as e:
        return _validation_error_response(e)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(UserListSerializer(target).data, status=status.HTTP_200_OK)


@api_view(['POST'])
@require_active
def admin_user_supervisor(request, user_id):
    """
    Set or clear the direct supervisor (admin only).

    POST /accounts/admin/users/<id>/supervisor/
    - Request body: { "gestor_id": 12 } or { "gestor_id": null }
    """
    target = _get_target(user_id)
    if target is None:
        return _not_found()

    serializer = SupervisorAssignmentSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        target = UserAccountService.assign_supervisor(
            request.user, target, serializer.validated_data['gestor_id']
        )
    except ValidationError as e:
        return _validation_error_response(e)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(UserListSerializer(target).data, status=status.HTTP_200_OK)


@api_view(['POST'])
@require_active
def admin_user_deactivate(request, user_id):
    """
    Deactivate an account (admin only). Accounts are never deleted.

    POST /accounts/admin/users/<id>/deactivate/
    """
    target = _get_target(user_id)
    if target is None:
        return _not_found()

    try:
        target = UserAccountService.deactivate(request.user, target)
    except ValidationError as e:
        return _validation_error_response(e)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(UserListSerializer(target).data, status=status.HTTP_200_OK)
