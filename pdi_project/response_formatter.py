"""
Standardized API response envelope.

Every response leaving the API has the shape:
{
    "status": "success" | "error",
    "message": "string message or empty",
    "data": {...} | [] | null
}
"""
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status as http_status
from rest_framework.renderers import JSONRenderer


def custom_exception_handler(exc, context):
    """
    Run DRF's handler, then rewrite the body into the standard envelope.

    Policy denials raised from the service layer arrive here as Django's
    PermissionDenied; DRF already maps them to 403.
    """
    response = exception_handler(exc, context)

    if response is not None:
        if isinstance(exc, DjangoPermissionDenied) and str(exc):
            response.data = {'detail': str(exc)}
        response.data = format_error_response(response.data, response.status_code)

    return response


def format_error_response(errors, status_code):
    """
    Flatten DRF/Django error payloads into a single message string.

    - {"field": ["e1", "e2"]} -> "field: e1, e2"
    - {"detail": "message"}   -> "message"
    - ["e1", "e2"]            -> "e1, e2"
    """
    message = ""

    if isinstance(errors, dict):
        field_messages = []
        for field, field_errors in errors.items():
            if field in ('detail', 'error'):
                message = str(field_errors)
            elif isinstance(field_errors, list):
                field_messages.append(f"{field}: {', '.join(str(e) for e in field_errors)}")
            elif isinstance(field_errors, dict):
                field_messages.append(f"{field}: {format_nested_errors(field_errors)}")
            else:
                field_messages.append(f"{field}: {field_errors}")

        if field_messages:
            message = "; ".join(field_messages)

    elif isinstance(errors, list):
        message = ", ".join(str(e) for e in errors)

    else:
        message = str(errors)

    return {
        "status": "error",
        "message": message,
        "data": None
    }


def format_nested_errors(errors_dict):
    """Format nested error dictionaries."""
    messages = []
    for key, value in errors_dict.items():
        if isinstance(value, list):
            messages.append(f"{key}: {', '.join(str(v) for v in value)}")
        elif isinstance(value, dict):
            messages.append(f"{key}: {format_nested_errors(value)}")
        else:
            messages.append(f"{key}: {value}")
    return "; ".join(messages)


class StandardizedJSONRenderer(JSONRenderer):
    """
    JSON renderer that wraps anything not already in the envelope.
    """

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = renderer_context.get('response') if renderer_context else None
        # 204 No Content keeps an empty body
        if response is not None and response.status_code == 204:
            return b''
        if response is not None and not self.is_already_formatted(data):
            if response.status_code >= 400:
                data = format_error_response(data, response.status_code)
            else:
                data = self.format_success_response(data)

        return super().render(data, accepted_media_type, renderer_context)

    def is_already_formatted(self, data):
        return isinstance(data, dict) and {'status', 'message', 'data'} <= set(data.keys())

    def format_success_response(self, data):
        if isinstance(data, dict) and 'detail' in data:
            message = str(data['detail'])
            response_data = None
        elif data is None or (isinstance(data, dict) and not data):
            message = ""
            response_data = None
        else:
            message = ""
            response_data = data

        return {
            "status": "success",
            "message": message,
            "data": response_data
        }


def success_response(data=None, message="", status_code=http_status.HTTP_200_OK):
    """
    Build an already-enveloped success response.

    Usage:
        return success_response(
            data=serializer.data,
            message="Objective created",
            status_code=status.HTTP_201_CREATED
        )
    """
    return Response({
        "status": "success",
        "message": message,
        "data": data
    }, status=status_code)


def error_response(message, data=None, status_code=http_status.HTTP_400_BAD_REQUEST):
    """
    Build an already-enveloped error response.

    Usage:
        return error_response("Objective not found", status_code=status.HTTP_404_NOT_FOUND)
    """
    return Response({
        "status": "error",
        "message": message,
        "data": data
    }, status=status_code)
