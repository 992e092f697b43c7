from django.core.exceptions import PermissionDenied, ValidationError
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.security.decorators import require_active
from core.security.middleware import get_data_source
from HR.pdi.models import PDIComment, PDIObjective
from HR.pdi.serializers import (
    CommentCreateSerializer,
    MentorSerializer,
    ObjectiveCreateSerializer,
    ObjectiveEvaluationSerializer,
    ObjectiveUpdateSerializer,
    PDICommentSerializer,
    PDIObjectiveSerializer,
)
from HR.pdi.services import AchievementService, CommentService, ObjectiveService
from pdi_project.pagination import auto_paginate


def _error_detail(e):
    return e.message_dict if hasattr(e, 'message_dict') else str(e)


def _not_found():
    return Response({'error': 'Objective not found'}, status=status.HTTP_404_NOT_FOUND)


# =================================================================================================
# OBJECTIVE VIEWS
# =================================================================================================

@api_view(['GET', 'POST'])
@require_active
@auto_paginate
def objective_list(request):
    """
    List the objectives the user may read, or create one.

    GET /hr/pdi/objectives/
    - Filters: colaborador_id, objetivo_status

    POST /hr/pdi/objectives/
    - Request body: { "titulo", "descricao"?, "competency_id"?, "mentor_id"?,
      "data_inicio"?, "data_fim"?, "colaborador_id"? }
    """
    if request.method == 'GET':
        objectives = ObjectiveService.list_visible(
            get_data_source(request),
            request.user,
            colaborador_id=request.query_params.get('colaborador_id'),
            objetivo_status=request.query_params.get('objetivo_status'),
        )
        return Response(objectives, status=status.HTTP_200_OK)

    serializer = ObjectiveCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        result = get_data_source(request).write(
            lambda: ObjectiveService.create(request.user, serializer.to_dto())
        )
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    if result.failed:
        return Response({'error': result.error}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(PDIObjectiveSerializer(result.value).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH', 'DELETE'])
@require_active
def objective_detail(request, pk):
    """
    GET    /hr/pdi/objectives/<pk>/
    PATCH  /hr/pdi/objectives/<pk>/   (owner fields)
    DELETE /hr/pdi/objectives/<pk>/
    """
    try:
        objective = ObjectiveService.get_visible(request.user, pk)
    except PDIObjective.DoesNotExist:
        return _not_found()

    if request.method == 'GET':
        return Response(PDIObjectiveSerializer(objective).data, status=status.HTTP_200_OK)

    try:
        if request.method == 'PATCH':
            serializer = ObjectiveUpdateSerializer(data=request.data)
            if not serializer.is_valid():
                return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
            objective = ObjectiveService.update(request.user, objective.pk, serializer.to_dto())
            return Response(PDIObjectiveSerializer(objective).data, status=status.HTTP_200_OK)

        ObjectiveService.delete(request.user, objective.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)


@api_view(['POST'])
@require_active
def objective_evaluate(request, pk):
    """
    Approve/reject an objective or award extra points.

    POST /hr/pdi/objectives/<pk>/evaluate/
    - Request body: { "status"?: "aprovado" | "rejeitado" | "proposto_gestor", "pontos_extra"?: int }
    """
    serializer = ObjectiveEvaluationSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        objective = ObjectiveService.evaluate(request.user, pk, serializer.to_dto())
    except PDIObjective.DoesNotExist:
        return _not_found()
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response(PDIObjectiveSerializer(objective).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@require_active
def next_objective(request):
    """
    GET /hr/pdi/next-objective/
    - Returns the newest open objective of the user, or null
    """
    objective = ObjectiveService.next_objective(request.user)
    data = PDIObjectiveSerializer(objective).data if objective else None
    return Response({'objective': data}, status=status.HTTP_200_OK)


@api_view(['GET'])
@require_active
@auto_paginate
def mentor_list(request):
    """
    GET /hr/pdi/mentors/
    """
    mentors = ObjectiveService.mentors()
    return Response(MentorSerializer(mentors, many=True).data, status=status.HTTP_200_OK)


# =================================================================================================
# COMMENT VIEWS
# =================================================================================================

@api_view(['GET', 'POST'])
@require_active
@auto_paginate
def comment_list(request, objective_id):
    """
    GET  /hr/pdi/objectives/<objective_id>/comments/
    POST /hr/pdi/objectives/<objective_id>/comments/
    - Request body: { "texto": "..." }
    """
    try:
        if request.method == 'GET':
            comments = CommentService.list_for_objective(get_data_source(request), request.user, objective_id)
            return Response(comments, status=status.HTTP_200_OK)

        serializer = CommentCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        comment = CommentService.create(request.user, objective_id, serializer.to_dto())
        return Response(PDICommentSerializer(comment).data, status=status.HTTP_201_CREATED)
    except PDIObjective.DoesNotExist:
        return _not_found()
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)


@api_view(['DELETE'])
@require_active
def comment_detail(request, pk):
    """
    DELETE /hr/pdi/comments/<pk>/   (author only)
    """
    try:
        CommentService.delete(request.user, pk)
    except PDIComment.DoesNotExist:
        return Response({'error': 'Comment not found'}, status=status.HTTP_404_NOT_FOUND)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response(status=status.HTTP_204_NO_CONTENT)


# =================================================================================================
# ACHIEVEMENT VIEWS
# =================================================================================================

@api_view(['GET'])
@require_active
@auto_paginate
def achievement_list(request):
    """
    GET /hr/pdi/achievements/?user_id=<id>
    """
    achievements = AchievementService.list_for(
        get_data_source(request),
        request.user,
        user_id=request.query_params.get('user_id'),
    )
    return Response(achievements, status=status.HTTP_200_OK)
