"""Error Hierarchy — verifies codes, HTTP statuses and the response envelope."""

import pytest

from cleancrud.core.errors import (
    CleanCrudError, DatabaseError, ErrorCategory, ErrorContext, ErrorSeverity,
    ForbiddenError, RequestFailedError, UnauthorizedError,
)
from cleancrud.core.result import Error, ErrorKind


def test_envelope_shape():
    exc = CleanCrudError("boom", "BOOM", ErrorCategory.INTERNAL, context=ErrorContext())
    body = exc.to_response()["error"]
    assert body["code"] == "BOOM"
    assert body["message"] == "boom"
    assert body["category"] == "internal"
    assert body["severity"] == "error"
    assert body["details"] == []
    assert "timestamp" in body


@pytest.mark.parametrize("kind,status,category", [
    (ErrorKind.VALIDATION, 400, ErrorCategory.VALIDATION),
    (ErrorKind.BUSINESS_RULE, 400, ErrorCategory.BUSINESS_RULE),
    (ErrorKind.NOT_FOUND, 404, ErrorCategory.RESOURCE_NOT_FOUND),
    (ErrorKind.CONFLICT, 409, ErrorCategory.CONFLICT),
    (ErrorKind.UNAUTHORIZED, 401, ErrorCategory.UNAUTHORIZED),
    (ErrorKind.FORBIDDEN, 403, ErrorCategory.FORBIDDEN),
])
def test_request_failed_maps_kind_to_status(kind, status, category):
    exc = RequestFailedError([Error("X", "bad", kind)])
    assert exc.http_status == status
    assert exc.category == category


def test_request_failed_uses_first_error_and_lists_all():
    exc = RequestFailedError((
        Error("EMAIL_TAKEN", "taken", ErrorKind.CONFLICT, "email"),
        Error("WEAK_PASSWORD", "weak", ErrorKind.VALIDATION, "password"),
    ))
    assert exc.code == "EMAIL_TAKEN"
    assert exc.http_status == 409
    assert exc.details == [
        {"field": "email", "message": "taken", "code": "EMAIL_TAKEN"},
        {"field": "password", "message": "weak", "code": "WEAK_PASSWORD"},
    ]


def test_request_failed_requires_errors():
    with pytest.raises(ValueError):
        RequestFailedError([])


def test_auth_errors():
    assert UnauthorizedError().http_status == 401
    assert UnauthorizedError().message == "Authentication required"
    assert ForbiddenError().http_status == 403
    assert ForbiddenError().severity == ErrorSeverity.WARNING


def test_database_error():
    db = DatabaseError("lost connection", "execute")
    assert db.http_status == 503
    assert db.severity == ErrorSeverity.CRITICAL
    assert db.operation == "execute"
