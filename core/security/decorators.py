"""
Role decorators for function-based views.
"""
from functools import wraps

from rest_framework import status
from rest_framework.response import Response

from core.security.policy import ActorContext


def require_roles(*roles):
    """
    Allow the view only for active users holding one of ``roles``.

    Usage:
        @api_view(['POST'])
        @require_roles(Role.ADMIN, Role.GESTOR)
        def team_create(request):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return Response(
                    {'error': 'Authentication required'},
                    status=status.HTTP_401_UNAUTHORIZED
                )

            actor = ActorContext.from_user(request.user)
            if actor is None or not actor.is_active:
                return Response(
                    {'error': 'Permission denied', 'detail': 'Account is inactive'},
                    status=status.HTTP_403_FORBIDDEN
                )

            if actor.role not in roles:
                return Response(
                    {
                        'error': 'Permission denied',
                        'detail': f"Requires one of the roles: {', '.join(str(r) for r in roles)}",
                    },
                    status=status.HTTP_403_FORBIDDEN
                )

            return view_func(request, *args, **kwargs)

        wrapper.required_roles = roles
        return wrapper
    return decorator


def require_active(view_func):
    """Reject authenticated users whose account has been deactivated."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        actor = ActorContext.from_user(request.user)
        if actor is None:
            return Response(
                {'error': 'Authentication required'},
                status=status.HTTP_401_UNAUTHORIZED
            )
        if not actor.is_active:
            return Response(
                {'error': 'Permission denied', 'detail': 'Account is inactive'},
                status=status.HTTP_403_FORBIDDEN
            )
        return view_func(request, *args, **kwargs)
    return wrapper
