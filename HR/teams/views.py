from django.core.exceptions import PermissionDenied, ValidationError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.security.decorators import require_active, require_roles
from core.security.middleware import get_data_source
from core.security.roles import Role
from HR.teams.models import Team
from HR.teams.serializers import (
    FeedbackSerializer,
    OneOnOneSerializer,
    PerformanceReviewSerializer,
    TeamCreateSerializer,
    TeamMemberSerializer,
    TeamSerializer,
    TeamUpdateSerializer,
    TouchpointSerializer,
)
from HR.teams.services import TeamService, TouchpointService
from pdi_project.pagination import auto_paginate


def _error_detail(e):
    return e.message_dict if hasattr(e, 'message_dict') else str(e)


@api_view(['GET'])
@require_active
@auto_paginate
def team_list(request):
    """
    GET /hr/teams/teams/?search=produto
    """
    teams = TeamService.list_teams(get_data_source(request), request.user, request.query_params)
    return Response(teams, status=status.HTTP_200_OK)


@api_view(['POST'])
@require_roles(Role.GESTOR, Role.ADMIN)
def team_create(request):
    """
    POST /hr/teams/teams/create/
    - Request body: { "nome", "descricao"?, "leader_id"?, "member_ids"? }
    """
    serializer = TeamCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        result = get_data_source(request).write(
            lambda: TeamService.create(request.user, serializer.to_dto())
        )
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    if result.failed:
        return Response({'error': result.error}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(TeamSerializer(result.value).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH', 'DELETE'])
@require_active
def team_detail(request, pk):
    """
    GET    /hr/teams/teams/<pk>/
    PATCH  /hr/teams/teams/<pk>/   (leader or admin)
    DELETE /hr/teams/teams/<pk>/   (admin)
    """
    team = get_object_or_404(Team.objects.active(), pk=pk)

    if request.method == 'GET':
        return Response(TeamSerializer(team).data, status=status.HTTP_200_OK)

    try:
        if request.method == 'PATCH':
            serializer = TeamUpdateSerializer(data=request.data)
            if not serializer.is_valid():
                return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
            team = TeamService.update(request.user, team.pk, serializer.to_dto())
            return Response(TeamSerializer(team).data, status=status.HTTP_200_OK)

        TeamService.deactivate(request.user, team.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)


@api_view(['POST'])
@require_active
def team_member_add(request, pk):
    """
    POST /hr/teams/teams/<pk>/members/
    - Request body: { "user_id": 7 }
    """
    serializer = TeamMemberSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        team = TeamService.add_member(request.user, pk, serializer.validated_data['user_id'])
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response(TeamSerializer(team).data, status=status.HTTP_200_OK)


@api_view(['DELETE'])
@require_active
def team_member_remove(request, pk, user_id):
    """
    DELETE /hr/teams/teams/<pk>/members/<user_id>/
    """
    try:
        team = TeamService.remove_member(request.user, pk, user_id)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response(TeamSerializer(team).data, status=status.HTTP_200_OK)


# =================================================================================================
# TOUCHPOINT VIEWS
# =================================================================================================

@api_view(['GET'])
@require_active
@auto_paginate
def touchpoint_list(request):
    """
    GET /hr/teams/touchpoints/?colaborador_id=<id>&tipo=feedback
    - Colaboradores see their own touchpoints, gestores those of direct reports
    """
    rows = TouchpointService.list_visible(
        get_data_source(request),
        request.user,
        colaborador_id=request.query_params.get('colaborador_id'),
        tipo=request.query_params.get('tipo'),
    )
    return Response(rows, status=status.HTTP_200_OK)


def _record_touchpoint(request, serializer_class, action):
    serializer = serializer_class(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        result = get_data_source(request).write(lambda: action(request.user, serializer.to_dto()))
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    if result.failed:
        return Response({'error': result.error}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(TouchpointSerializer(result.value).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@require_roles(Role.GESTOR, Role.ADMIN)
def touchpoint_one_on_one(request):
    """
    POST /hr/teams/touchpoints/one-on-one/
    - Request body: { "colaborador_id", "data_reuniao" }
    """
    return _record_touchpoint(request, OneOnOneSerializer, TouchpointService.schedule_one_on_one)


@api_view(['POST'])
@require_roles(Role.GESTOR, Role.ADMIN)
def touchpoint_feedback(request):
    """
    POST /hr/teams/touchpoints/feedback/
    - Request body: { "colaborador_id", "feedback" }
    """
    return _record_touchpoint(request, FeedbackSerializer, TouchpointService.give_feedback)


@api_view(['POST'])
@require_roles(Role.GESTOR, Role.ADMIN)
def touchpoint_performance_review(request):
    """
    POST /hr/teams/touchpoints/performance-review/
    - Request body: { "colaborador_id", "feedback", "data_reuniao"? }
    """
    return _record_touchpoint(request, PerformanceReviewSerializer, TouchpointService.performance_review)
