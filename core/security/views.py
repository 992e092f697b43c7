from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.security.decorators import require_active
from core.security.middleware import get_data_source
from core.security.roles import Role
from core.security.serializers import DataSourceModeSerializer


def _mode_payload(data_source):
    return {
        'mode': data_source.mode,
        'is_degraded': data_source.is_degraded,
    }


@api_view(['GET', 'POST'])
@require_active
def data_source_mode(request):
    """
    Read or change the data source mode.

    GET  /core/security/data-source/
    POST /core/security/data-source/   (admin only)
        {"mode": "live"}   -> set explicitly
        {}                 -> toggle
    """
    data_source = get_data_source(request)

    if request.method == 'GET':
        return Response(_mode_payload(data_source))

    if request.user.role != Role.ADMIN:
        return Response(
            {'error': 'Permission denied', 'detail': 'Only administrators can change the data source mode'},
            status=status.HTTP_403_FORBIDDEN
        )

    serializer = DataSourceModeSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    mode = serializer.validated_data.get('mode')
    if mode:
        data_source.set_mode(mode)
    else:
        data_source.toggle()
    return Response(_mode_payload(data_source))
