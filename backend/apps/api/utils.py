from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.response import Response

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "UNSUPPORTED_MEDIA_TYPE": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    headers: Optional[Mapping[str, Any]] = None,
) -> Response:
    """
    Build the ``{"error": {...}}`` envelope every failing endpoint returns.

    ``code`` is upper-cased and, unless ``http_status`` is given, picks the
    status from ``ERROR_STATUS_MAP`` (unknown codes answer 400). ``details``
    is included only when provided.
    """

    code = (code or "").strip().upper()
    message = (message or "").strip()
    if not code or not message:
        raise ValueError("error_response requires a code and a message")

    status_code = int(http_status) if http_status is not None else ERROR_STATUS_MAP.get(
        code, DEFAULT_ERROR_STATUS
    )
    if not 100 <= status_code <= 599:
        raise ValueError(f"error_response got an invalid HTTP status: {status_code}")

    error: Dict[str, Any] = {"code": code, "message": message, "status": status_code}
    if details is not None:
        error["details"] = dict(details) if isinstance(details, Mapping) else details

    response_headers = {str(k): str(v) for k, v in headers.items()} if headers else None
    return Response({"error": error}, status=status_code, headers=response_headers)


def created_response(data: Any, location: str) -> Response:
    """201 response pointing clients at the newly created resource."""
    if not location:
        raise ValueError("created_response requires a location")
    return Response(
        data, status=status.HTTP_201_CREATED, headers={"Location": location}
    )
