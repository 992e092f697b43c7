from django.core.exceptions import PermissionDenied, ValidationError
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.security.decorators import require_active, require_roles
from core.security.middleware import get_data_source
from core.security.roles import Role
from HR.assessment.serializers import (
    AssessmentSerializer,
    ManagerAssessmentSerializer,
    SelfAssessmentSerializer,
)
from HR.assessment.services import AssessmentService
from pdi_project.pagination import auto_paginate


def _error_detail(e):
    return e.message_dict if hasattr(e, 'message_dict') else str(e)


def _write(request, mutation, success_status=status.HTTP_201_CREATED):
    try:
        result = get_data_source(request).write(mutation)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    if result.failed:
        return Response({'error': result.error}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(AssessmentSerializer(result.value).data, status=success_status)


@api_view(['GET', 'POST'])
@require_active
@auto_paginate
def assessment_list(request):
    """
    GET /hr/assessment/assessments/
    - Filters: avaliado_id, ciclo

    POST /hr/assessment/assessments/   (self-assessment)
    - Request body: { "competency_id", "nota", "comentario"?, "ciclo"? }
    """
    if request.method == 'GET':
        rows = AssessmentService.list_visible(
            get_data_source(request),
            request.user,
            avaliado_id=request.query_params.get('avaliado_id'),
            ciclo=request.query_params.get('ciclo'),
        )
        return Response(rows, status=status.HTTP_200_OK)

    serializer = SelfAssessmentSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    return _write(request, lambda: AssessmentService.self_assess(request.user, serializer.to_dto()))


@api_view(['POST'])
@require_roles(Role.GESTOR, Role.ADMIN)
def manager_assessment(request):
    """
    POST /hr/assessment/assessments/manager/
    - Request body: { "avaliado_id", "competency_id", "nota", "comentario"?, "ciclo"? }
    """
    serializer = ManagerAssessmentSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    return _write(request, lambda: AssessmentService.manager_assess(request.user, serializer.to_dto()))


@api_view(['GET'])
@require_active
def assessment_report(request, user_id):
    """
    GET /hr/assessment/report/<user_id>/?ciclo=2024
    - Returns per-competency self/manager scores, divergence and nine-box position
    """
    try:
        report = AssessmentService.report(
            get_data_source(request), request.user, user_id, ciclo=request.query_params.get('ciclo')
        )
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_404_NOT_FOUND)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response(report, status=status.HTTP_200_OK)
