"""
Response envelope helpers shared by every API view.

    from roomchat.utils.responses import success_response, error_response

    return success_response(data=serializer.data)
    return created_response(data={"document_id": str(doc.id)}, message="Document uploaded")
    return error_response("Missing required file or title")
    return partial_response("QR codes regenerated for 3 of 4 rooms", data=result)
"""

from rest_framework import status as http_status
from rest_framework.response import Response


def success_response(data=None, message=None, status=http_status.HTTP_200_OK):
    """{"success": true, "message"?: str, "data"?: any}"""
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return Response(body, status=status)


def error_response(message, errors=None, status=http_status.HTTP_400_BAD_REQUEST, data=None):
    """{"success": false, "message": str, "errors"?: object, "data"?: any}"""
    body = {
        "success": False,
        "message": message,
    }
    if errors:
        body["errors"] = errors
    if data is not None:
        body["data"] = data
    return Response(body, status=status)


def created_response(data=None, message="Created successfully"):
    return success_response(data=data, message=message, status=http_status.HTTP_201_CREATED)


def partial_response(message, data=None, errors=None):
    """
    207 for batch operations where some items succeeded and some did not.
    The body is flagged unsuccessful so clients cannot mistake it for a clean run.
    """
    return error_response(message, errors=errors, status=http_status.HTTP_207_MULTI_STATUS, data=data)


def not_found_response(message="Not found"):
    return error_response(message=message, status=http_status.HTTP_404_NOT_FOUND)


def server_error_response(message="An unexpected error occurred", data=None):
    return error_response(message=message, status=http_status.HTTP_500_INTERNAL_SERVER_ERROR, data=data)


def paginated_response(data, message="Fetched successfully", status=http_status.HTTP_200_OK):
    """
    Wraps DRF pagination output:
    {"success": true, "message": ..., "data": {"count", "next", "previous", "results"}}
    """
    return success_response(data=data, message=message, status=status)
