"""Tests for domain exceptions (error_code, message, details)."""

from app.domain.exceptions import (
    AuthenticationException,
    FleetViewException,
    SqlNotConfiguredException,
    StoreFailureException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base FleetViewException uses class name as error_code when not provided."""
    exc = FleetViewException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "FleetViewException"
    assert exc.details == {}


def test_base_exception_to_dict_omits_empty_details() -> None:
    assert FleetViewException("Oops", error_code="CUSTOM").to_dict() == {
        "success": False,
        "error": "CUSTOM",
        "message": "Oops",
    }


def test_validation_exception_field() -> None:
    exc = ValidationException("Invalid date format. Use YYYY-MM-DD", field="date")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "date"}
    assert isinstance(exc, FleetViewException)


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.error_code == "AUTHENTICATION_ERROR"
    assert exc.message == "Authentication failed"


def test_store_failure_keeps_underlying_error() -> None:
    exc = StoreFailureException("Error fetching analytics data", error="connection lost")
    body = exc.to_dict()
    assert body["error"] == "STORE_FAILURE"
    assert body["message"] == "Error fetching analytics data"
    assert body["details"] == {"error": "connection lost"}


def test_sql_not_configured() -> None:
    exc = SqlNotConfiguredException()
    assert exc.error_code == "SQL_NOT_CONFIGURED"
    assert "DATABASE_URL" in exc.message
