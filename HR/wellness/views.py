from django.core.exceptions import PermissionDenied, ValidationError
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.security.decorators import require_active, require_roles
from core.security.middleware import get_data_source
from core.security.roles import Role
from HR.wellness.models import HRRecord, HRTest
from HR.wellness.serializers import (
    HRRecordCreateSerializer,
    HRRecordUpdateSerializer,
    HRTestCompleteSerializer,
    HRTestCreateSerializer,
)
from HR.wellness.services import HRRecordService, HRTestService
from pdi_project.pagination import auto_paginate


def _error_detail(e):
    return e.message_dict if hasattr(e, 'message_dict') else str(e)


# =================================================================================================
# HR RECORD VIEWS
# =================================================================================================

@api_view(['GET'])
@require_active
@auto_paginate
def record_list(request):
    """
    GET /hr/wellness/records/?user_id=<id>
    - Confidential rows are masked unless the user is rh or the subject
    """
    rows = HRRecordService.list_visible(
        get_data_source(request),
        request.user,
        user_id=request.query_params.get('user_id'),
    )
    return Response(rows, status=status.HTTP_200_OK)


@api_view(['POST'])
@require_roles(Role.RH, Role.ADMIN)
def record_create(request):
    """
    POST /hr/wellness/records/create/
    - Request body: { "user_id", "titulo", "tipo"?, "conteudo"?, "data_sessao"?, "sensitivity"? }
    """
    serializer = HRRecordCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        result = get_data_source(request).write(
            lambda: HRRecordService.create(request.user, serializer.to_dto())
        )
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    if result.failed:
        return Response({'error': result.error}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(HRRecordService.masked(request.user, result.value), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH', 'DELETE'])
@require_active
def record_detail(request, pk):
    """
    GET    /hr/wellness/records/<pk>/
    PATCH  /hr/wellness/records/<pk>/   (rh or admin)
    DELETE /hr/wellness/records/<pk>/   (rh or admin)
    """
    try:
        record = HRRecordService.get_visible(request.user, pk)
    except HRRecord.DoesNotExist:
        return Response({'error': 'HR record not found'}, status=status.HTTP_404_NOT_FOUND)

    if request.method == 'GET':
        return Response(HRRecordService.masked(request.user, record), status=status.HTTP_200_OK)

    try:
        if request.method == 'PATCH':
            serializer = HRRecordUpdateSerializer(data=request.data)
            if not serializer.is_valid():
                return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
            record = HRRecordService.update(request.user, record.pk, serializer.to_dto())
            return Response(HRRecordService.masked(request.user, record), status=status.HTTP_200_OK)

        HRRecordService.delete(request.user, record.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)


# =================================================================================================
# HR TEST VIEWS
# =================================================================================================

@api_view(['GET', 'POST'])
@require_active
@auto_paginate
def hr_test_list(request):
    """
    GET  /hr/wellness/tests/?user_id=<id>&pending=true
    POST /hr/wellness/tests/   (rh or admin)
    - Request body: { "user_id", "test_type", "questions"? }
    """
    if request.method == 'GET':
        rows = HRTestService.list_visible(
            get_data_source(request),
            request.user,
            user_id=request.query_params.get('user_id'),
            pending=request.query_params.get('pending', '').lower() == 'true',
        )
        return Response(rows, status=status.HTTP_200_OK)

    serializer = HRTestCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        result = get_data_source(request).write(
            lambda: HRTestService.create(request.user, serializer.to_dto())
        )
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    if result.failed:
        return Response({'error': result.error}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(HRTestService.masked(request.user, result.value), status=status.HTTP_201_CREATED)


@api_view(['POST'])
@require_active
def hr_test_complete(request, pk):
    """
    POST /hr/wellness/tests/<pk>/complete/
    - Request body: { "answers": {"q1": 4, "q2": 7} }
    - Stores the average score (0-10) and its interpretation
    """
    serializer = HRTestCompleteSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        test = HRTestService.complete(request.user, pk, serializer.to_dto())
    except HRTest.DoesNotExist:
        return Response({'error': 'HR test not found'}, status=status.HTTP_404_NOT_FOUND)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response(HRTestService.masked(request.user, test), status=status.HTTP_200_OK)
