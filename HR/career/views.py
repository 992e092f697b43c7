from django.core.exceptions import PermissionDenied, ValidationError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.security.decorators import require_active
from core.security.middleware import get_data_source
from HR.career.models import CareerTrack
from HR.career.serializers import (
    CareerTrackCreateSerializer,
    CareerTrackSerializer,
    CareerTrackUpdateSerializer,
    CompetencyCreateSerializer,
    CompetencySerializer,
    SalaryHistorySerializer,
    SalaryRecordCreateSerializer,
)
from HR.career.services import CareerTrackService, CompetencyService, SalaryHistoryService
from pdi_project.pagination import auto_paginate


def _error_detail(e):
    return e.message_dict if hasattr(e, 'message_dict') else str(e)


# =================================================================================================
# CAREER TRACK VIEWS
# =================================================================================================

@api_view(['GET', 'POST'])
@require_active
@auto_paginate
def track_list(request):
    """
    List active career tracks or create one (admin).

    GET  /hr/career/tracks/
    POST /hr/career/tracks/
    """
    if request.method == 'GET':
        tracks = CareerTrackService.list_tracks(get_data_source(request))
        return Response(tracks, status=status.HTTP_200_OK)

    serializer = CareerTrackCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        track = CareerTrackService.create(request.user, serializer.to_dto())
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response(CareerTrackSerializer(track).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH', 'DELETE'])
@require_active
def track_detail(request, pk):
    """
    GET    /hr/career/tracks/<pk>/
    PATCH  /hr/career/tracks/<pk>/   (admin)
    DELETE /hr/career/tracks/<pk>/   (admin, soft delete)
    """
    track = get_object_or_404(CareerTrack.objects.active(), pk=pk)

    if request.method == 'GET':
        return Response(CareerTrackSerializer(track).data, status=status.HTTP_200_OK)

    try:
        if request.method == 'PATCH':
            serializer = CareerTrackUpdateSerializer(data=request.data)
            if not serializer.is_valid():
                return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
            track = CareerTrackService.update(request.user, track.pk, serializer.to_dto())
            return Response(CareerTrackSerializer(track).data, status=status.HTTP_200_OK)

        CareerTrackService.deactivate(request.user, track.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)


# =================================================================================================
# COMPETENCY VIEWS
# =================================================================================================

@api_view(['GET', 'POST'])
@require_active
@auto_paginate
def competency_list(request):
    """
    GET  /hr/career/competencies/?tipo=hard&stage_id=2
    POST /hr/career/competencies/   (admin)
    """
    if request.method == 'GET':
        competencies = CompetencyService.list_competencies(
            get_data_source(request),
            tipo=request.query_params.get('tipo'),
            stage_id=request.query_params.get('stage_id'),
        )
        return Response(competencies, status=status.HTTP_200_OK)

    serializer = CompetencyCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        competency = CompetencyService.create(request.user, serializer.to_dto())
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response(CompetencySerializer(competency).data, status=status.HTTP_201_CREATED)


# =================================================================================================
# SALARY HISTORY VIEWS
# =================================================================================================

@api_view(['GET', 'POST'])
@require_active
@auto_paginate
def salary_history_list(request):
    """
    GET  /hr/career/salary-history/?user_id=<id>
    - Users see their own history; admins see everyone's.

    POST /hr/career/salary-history/   (admin)
    """
    if request.method == 'GET':
        rows = SalaryHistoryService.list_for(
            get_data_source(request),
            request.user,
            user_id=request.query_params.get('user_id'),
        )
        return Response(rows, status=status.HTTP_200_OK)

    serializer = SalaryRecordCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        record = SalaryHistoryService.create(request.user, serializer.to_dto())
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response(SalaryHistorySerializer(record).data, status=status.HTTP_201_CREATED)
