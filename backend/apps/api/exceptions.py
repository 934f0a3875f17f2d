from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    MethodNotAllowed,
    NotFound,
    ParseError,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

# exception types -> (code, fallback message, include DRF payload as details)
DRF_ERROR_CODES = (
    (ValidationError, "VALIDATION_ERROR", "Validation failed", True),
    (ParseError, "VALIDATION_ERROR", "Malformed request", True),
    ((NotFound, Http404), "NOT_FOUND", "Resource not found", False),
    (MethodNotAllowed, "METHOD_NOT_ALLOWED", "Method not allowed", False),
    (UnsupportedMediaType, "UNSUPPORTED_MEDIA_TYPE", "Unsupported media type", False),
)

SERVER_ERROR_MESSAGE = "Something went wrong"


class ApplicationError(Exception):
    """
    Domain-level application error meant to be raised from controllers or views.

    Args:
        code: Machine readable error code.
        message: Human readable explanation of the error.
        status_code: Optional explicit HTTP status. If omitted, code mapping is used.
        details: Optional structured details for clients.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
        )


class NotFoundError(ApplicationError):
    """An identified resource is absent from its store."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            "NOT_FOUND",
            f"{resource} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"id": str(identifier)},
        )
        self.resource = resource
        self.identifier = identifier


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    DRF ``EXCEPTION_HANDLER``: every failure leaves the API in the error envelope.

    Application errors render themselves, integrity violations (including
    protected deletes) become 409, DRF's own exceptions are renamed to our
    codes, and anything else is logged and answered with a bare 500.
    """

    log = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        log.info("Handled application error", code=exc.code, status=exc.status_code)
        return exc.to_response()

    if isinstance(exc, IntegrityError):
        log.warning("Integrity error raised by store", error=str(exc))
        return error_response(
            "CONFLICT",
            "Resource conflict",
            {"type": exc.__class__.__name__},
            http_status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(
            exc.message_dict if hasattr(exc, "message_dict") else exc.messages
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        log.exception("Unhandled exception bubbled to global handler")
        return error_response(
            "SERVER_ERROR",
            SERVER_ERROR_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code, message, details = _describe(exc, response)
    log.info("Converted API exception", code=code, status=response.status_code)
    return error_response(
        code,
        message,
        details,
        http_status=response.status_code,
        headers=dict(response.headers) if response.headers else None,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _describe(exc: Exception, response: Response) -> Tuple[str, str, Optional[Any]]:
    if response.status_code >= 500:
        return "SERVER_ERROR", SERVER_ERROR_MESSAGE, None
    payload = response.data
    for types, code, fallback, with_details in DRF_ERROR_CODES:
        if isinstance(exc, types):
            return code, _message(payload, fallback), payload if with_details else None
    return "REQUEST_FAILED", _message(payload, "Request failed"), None


def _message(payload: Any, fallback: str) -> str:
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    if isinstance(payload, str):
        return payload
    return fallback


__all__ = ["ApplicationError", "NotFoundError", "global_exception_handler"]
