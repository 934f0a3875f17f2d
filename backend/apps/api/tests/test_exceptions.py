from django.db import IntegrityError
from django.db.models import ProtectedError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import ParseError, ValidationError
from rest_framework.test import APIRequestFactory

from apps.api.exceptions import (
    ApplicationError,
    NotFoundError,
    global_exception_handler,
)

factory = APIRequestFactory()


class DummyView:
    pass


def _context(request):
    return {"request": request, "view": DummyView()}


def test_application_error_returns_structured_response():
    request = factory.get("/api/example/")
    exc = ApplicationError(
        "CONFLICT",
        "Category already exists",
        status_code=status.HTTP_409_CONFLICT,
        details={"name": "Black tea"},
    )
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_409_CONFLICT
    assert payload["code"] == "CONFLICT"
    assert payload["message"] == "Category already exists"
    assert payload["details"] == {"name": "Black tea"}


def test_validation_error_preserves_details():
    request = factory.post("/api/example/", data={})
    exc = ValidationError({"field": ["This field is required."]})
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert payload["code"] == "VALIDATION_ERROR"
    assert payload["message"] == "Validation failed"
    assert payload["details"] == {"field": ["This field is required."]}


def test_unhandled_exception_returns_generic_message():
    request = factory.get("/api/example/")
    response = global_exception_handler(RuntimeError("boom"), _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert payload["code"] == "SERVER_ERROR"
    assert payload["message"] == "Something went wrong"
    assert "details" not in payload



def test_not_found_error_carries_resource_and_id():
    request = factory.get("/api/products/7/")
    response = global_exception_handler(NotFoundError("Product", 7), _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert payload["code"] == "NOT_FOUND"
    assert payload["message"] == "Product not found"
    assert payload["details"] == {"id": "7"}


def test_http404_is_normalized_without_details():
    request = factory.get("/api/unknown/")
    response = global_exception_handler(Http404("nope"), _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert payload["code"] == "NOT_FOUND"
    assert "details" not in payload


def test_integrity_error_maps_to_conflict():
    request = factory.post("/api/products/", data={})
    exc = IntegrityError("FOREIGN KEY constraint failed")
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_409_CONFLICT
    assert payload["code"] == "CONFLICT"
    assert payload["details"] == {"type": "IntegrityError"}


def test_protected_delete_maps_to_conflict():
    request = factory.delete("/api/categories/1/")
    exc = ProtectedError("Category is referenced by products", set())
    response = global_exception_handler(exc, _context(request))
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.data["error"]["details"] == {"type": "ProtectedError"}


def test_application_error_envelope_has_no_extra_fields():
    response = NotFoundError("Category", 3).to_response()
    assert set(response.data["error"]) == {"code", "message", "status", "details"}


def test_parse_error_keeps_drf_message():
    request = factory.post("/api/categories/", data={})
    response = global_exception_handler(ParseError("JSON parse error"), _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert payload["code"] == "VALIDATION_ERROR"
    assert payload["message"] == "JSON parse error"
