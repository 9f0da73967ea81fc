"""
API exception handler.

Every error leaving a DRF view is rendered as:
{
    "success": false,
    "message": "Error description",
    "errors": { ... }  // only for field-level validation errors
}
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework.exceptions import (
    AuthenticationFailed,
    NotAuthenticated,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    # Model-level validation raised from save()/full_clean() is a client error too
    if isinstance(exc, DjangoValidationError):
        detail = exc.message_dict if hasattr(exc, 'error_dict') else exc.messages
        exc = ValidationError(detail=detail)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get('view')
        logger.error(f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}")
        return None

    body = {
        "success": False,
        "message": _get_error_message(exc),
    }
    if isinstance(exc, ValidationError) and isinstance(response.data, dict):
        if 'detail' not in response.data or len(response.data) > 1:
            body["errors"] = _normalize_errors(response.data)

    response.data = body
    return response


def _get_error_message(exc):
    if isinstance(exc, NotAuthenticated):
        return "Authentication credentials were not provided."

    if isinstance(exc, AuthenticationFailed):
        return "Invalid authentication credentials."

    if isinstance(exc, (Http404, NotFound)):
        return "Not found."

    if isinstance(exc, PermissionDenied):
        if getattr(exc, 'detail', None):
            return str(exc.detail)
        return "You do not have permission to perform this action."

    if isinstance(exc, ValidationError):
        return _first_error(exc.detail)

    detail = getattr(exc, 'detail', None)
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        return str(detail[0]) if detail else "An error occurred"
    if isinstance(detail, dict):
        if 'detail' in detail:
            return str(detail['detail'])
        return _first_error(detail)

    return "An error occurred"


def _first_error(errors):
    """Pick one human-readable message out of a nested error structure."""
    if isinstance(errors, str):
        return errors

    if isinstance(errors, list):
        for item in errors:
            found = _first_error(item)
            if found:
                return found

    if isinstance(errors, dict):
        for key, value in errors.items():
            if key == 'non_field_errors' and isinstance(value, list) and value:
                return str(value[0])
            if isinstance(value, list) and value:
                return f"{key}: {value[0]}"
            if isinstance(value, str):
                return f"{key}: {value}"
            if isinstance(value, dict):
                found = _first_error(value)
                if found:
                    return found

    return "Validation error"


def _normalize_errors(errors):
    """Turn every leaf of a field-error dict into a list of strings."""
    if not isinstance(errors, dict):
        return errors

    normalized = {}
    for key, value in errors.items():
        if isinstance(value, list):
            normalized[key] = [str(v) for v in value]
        elif isinstance(value, dict):
            normalized[key] = _normalize_errors(value)
        else:
            normalized[key] = [str(value)]
    return normalized
