from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.security.decorators import require_active
from core.security.middleware import get_data_source
from HR.dashboard.services import DashboardService


@api_view(['GET'])
@require_active
def dashboard_stats(request):
    """
    GET /hr/dashboard/stats/
    - Keys depend on the user's role
    """
    data_source = get_data_source(request)
    stats = DashboardService.stats(data_source, request.user)
    return Response(
        {'stats': stats, 'mode': data_source.mode},
        status=status.HTTP_200_OK
    )


@api_view(['GET'])
@require_active
def dashboard_activity(request):
    """
    GET /hr/dashboard/activity/?limit=10
    """
    try:
        limit = int(request.query_params.get('limit', 0)) or None
    except ValueError:
        return Response({'limit': 'Must be an integer'}, status=status.HTTP_400_BAD_REQUEST)
    events = DashboardService.activity(get_data_source(request), request.user, limit=limit)
    return Response({'activity': events}, status=status.HTTP_200_OK)
