"""Tests for domain error classes."""

from car_marketplace.domain.car import FilterValidationError, PagingValidationError
from car_marketplace.domain.errors import (
    DomainError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


class TestDomainError:
    """Tests for base DomainError class."""

    def test_stores_message_code_and_context(self) -> None:
        error = DomainError("Saved car lookup failed", car_id="42")

        assert error.message == "Saved car lookup failed"
        assert error.error_code == "DOMAIN_ERROR"
        assert error.context == {"car_id": "42"}
        assert str(error) == "Saved car lookup failed"

    def test_to_dict_flattens_context(self) -> None:
        error = DomainError("Broken", path="/saved-cars")

        assert error.to_dict() == {
            "message": "Broken",
            "code": "DOMAIN_ERROR",
            "path": "/saved-cars",
        }


class TestValidationError:
    """Tests for ValidationError class."""

    def test_default_message_without_field_errors(self) -> None:
        error = ValidationError()

        assert error.message == "Validation error"
        assert error.errors is None
        assert error.to_dict() == {"message": "Validation error", "code": "VALIDATION_ERROR"}

    def test_field_errors_change_default_message(self) -> None:
        errors = [{"field": "minPrice", "message": "Must be >= 0"}]

        error = ValidationError(errors=errors)

        assert error.message == "Validation failed"
        assert error.to_dict() == {
            "message": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }

    def test_catalog_validation_errors_share_the_code(self) -> None:
        assert PagingValidationError("page must be >= 1").error_code == "VALIDATION_ERROR"
        assert FilterValidationError("min_price cannot be negative").error_code == "VALIDATION_ERROR"


class TestNotFoundError:
    """Tests for NotFoundError class."""

    def test_message_with_identifier(self) -> None:
        error = NotFoundError("Car", "abc-123")

        assert error.message == "Car with identifier 'abc-123' not found"
        assert error.to_dict() == {
            "message": "Car with identifier 'abc-123' not found",
            "code": "NOT_FOUND",
            "resource": "Car",
            "identifier": "abc-123",
        }

    def test_message_without_identifier(self) -> None:
        error = NotFoundError("User")

        assert error.message == "User not found"
        assert error.context["identifier"] is None

    def test_explicit_message_overrides_generated_one(self) -> None:
        error = NotFoundError("User", message="Error toggling saved car: User not found")

        assert error.message == "Error toggling saved car: User not found"
        assert error.context["resource"] == "User"


class TestUnauthorizedError:
    def test_default_message(self) -> None:
        error = UnauthorizedError()

        assert error.message == "Unauthorized"
        assert error.error_code == "UNAUTHORIZED"


class TestInternalError:
    def test_error_code(self) -> None:
        error = InternalError("Error fetching cars: connection refused")

        assert error.error_code == "INTERNAL_ERROR"
        assert error.message == "Error fetching cars: connection refused"
