from django.core.exceptions import PermissionDenied, ValidationError
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.security.decorators import require_active
from core.security.middleware import get_data_source
from HR.action_groups.models import ActionGroup, ActionGroupTask
from HR.action_groups.serializers import (
    ActionGroupCreateSerializer,
    ActionGroupMemberSerializer,
    ActionGroupSerializer,
    ActionGroupTaskSerializer,
    ActionGroupUpdateSerializer,
    TaskCreateSerializer,
    TaskUpdateSerializer,
)
from HR.action_groups.services import ActionGroupService, ActionGroupTaskService
from pdi_project.pagination import auto_paginate


def _error_detail(e):
    return e.message_dict if hasattr(e, 'message_dict') else str(e)


def _group_not_found():
    return Response({'error': 'Action group not found'}, status=status.HTTP_404_NOT_FOUND)


def _group_payload(group):
    group = ActionGroup.objects.select_related('created_by').prefetch_related('memberships', 'tasks').get(pk=group.pk)
    return ActionGroupSerializer(group).data


# =================================================================================================
# ACTION GROUP VIEWS
# =================================================================================================

@api_view(['GET', 'POST'])
@require_active
@auto_paginate
def group_list(request):
    """
    GET  /hr/action-groups/groups/?status=active
    - Groups the user created or belongs to (admins see all)

    POST /hr/action-groups/groups/
    - Request body: { "nome", "descricao"?, "member_ids"? }
    """
    if request.method == 'GET':
        groups = ActionGroupService.list_visible(
            get_data_source(request),
            request.user,
            status=request.query_params.get('status'),
        )
        return Response(groups, status=status.HTTP_200_OK)

    serializer = ActionGroupCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        result = get_data_source(request).write(
            lambda: ActionGroupService.create(request.user, serializer.to_dto())
        )
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    if result.failed:
        return Response({'error': result.error}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(_group_payload(result.value), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH', 'DELETE'])
@require_active
def group_detail(request, pk):
    """
    GET    /hr/action-groups/groups/<pk>/
    PATCH  /hr/action-groups/groups/<pk>/   (creator or admin)
    DELETE /hr/action-groups/groups/<pk>/   (creator or admin)
    """
    try:
        group = ActionGroupService.get_visible(request.user, pk)
    except ActionGroup.DoesNotExist:
        return _group_not_found()

    if request.method == 'GET':
        return Response(_group_payload(group), status=status.HTTP_200_OK)

    try:
        if request.method == 'PATCH':
            serializer = ActionGroupUpdateSerializer(data=request.data)
            if not serializer.is_valid():
                return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
            group = ActionGroupService.update(request.user, group.pk, serializer.to_dto())
            return Response(_group_payload(group), status=status.HTTP_200_OK)

        ActionGroupService.delete(request.user, group.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)


@api_view(['POST'])
@require_active
def group_member_add(request, pk):
    """
    POST /hr/action-groups/groups/<pk>/members/
    - Request body: { "user_id": 7 }
    """
    serializer = ActionGroupMemberSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        group = ActionGroupService.add_member(request.user, pk, serializer.validated_data['user_id'])
    except ActionGroup.DoesNotExist:
        return _group_not_found()
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response(_group_payload(group), status=status.HTTP_200_OK)


@api_view(['DELETE'])
@require_active
def group_member_remove(request, pk, user_id):
    """
    DELETE /hr/action-groups/groups/<pk>/members/<user_id>/
    - Members may remove themselves
    """
    try:
        group = ActionGroupService.remove_member(request.user, pk, user_id)
    except ActionGroup.DoesNotExist:
        return _group_not_found()
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response(_group_payload(group), status=status.HTTP_200_OK)


# =================================================================================================
# TASK VIEWS
# =================================================================================================

@api_view(['GET', 'POST'])
@require_active
@auto_paginate
def task_list(request, pk):
    """
    GET  /hr/action-groups/groups/<pk>/tasks/
    POST /hr/action-groups/groups/<pk>/tasks/   (creator or admin)
    - Request body: { "titulo", "descricao"?, "responsavel_id"?, "data_limite"? }
    """
    try:
        if request.method == 'GET':
            tasks = ActionGroupTaskService.list_for_group(get_data_source(request), request.user, pk)
            return Response(tasks, status=status.HTTP_200_OK)

        serializer = TaskCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        result = get_data_source(request).write(
            lambda: ActionGroupTaskService.create(request.user, pk, serializer.to_dto())
        )
    except ActionGroup.DoesNotExist:
        return _group_not_found()
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    if result.failed:
        return Response({'error': result.error}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(ActionGroupTaskSerializer(result.value).data, status=status.HTTP_201_CREATED)


@api_view(['PATCH', 'DELETE'])
@require_active
def task_detail(request, pk):
    """
    PATCH  /hr/action-groups/tasks/<pk>/
    - Request body: { "status"?, "titulo"?, "responsavel_id"?, "data_limite"? }
    - Status changes are open to every participant

    DELETE /hr/action-groups/tasks/<pk>/   (creator or admin)
    """
    try:
        if request.method == 'PATCH':
            serializer = TaskUpdateSerializer(data=request.data)
            if not serializer.is_valid():
                return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
            task = ActionGroupTaskService.update(request.user, pk, serializer.to_dto())
            return Response(ActionGroupTaskSerializer(task).data, status=status.HTTP_200_OK)

        ActionGroupTaskService.delete(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    except ActionGroupTask.DoesNotExist:
        return Response({'error': 'Task not found'}, status=status.HTTP_404_NOT_FOUND)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    except PermissionDenied as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
