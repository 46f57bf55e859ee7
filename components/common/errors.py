from __future__ import annotations
from typing import Any, Dict, Optional


class ServiceError(Exception):
    """
    Base of the error taxonomy shared by every component.
    Services raise these; the gateway renders them into the UWF envelope
    with `status_code`.
    """
    type: str = "INTERNAL"
    code: str = "internal_error"
    message: str = "Internal server error"
    status_code: int = 500

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        if message:
            self.message = message
        if code:
            self.code = code
        self.details = details
        super().__init__(self.message)

    def to_payload(self, *, include_details: bool = True) -> Dict[str, Any]:
        return {
            "type": self.type,
            "code": self.code,
            "message": self.message,
            "details": (self.details or None) if include_details else None,
        }


class ValidationError(ServiceError):
    type = "VALIDATION"
    code = "validation_error"
    message = "All fields are required"
    status_code = 422


class DuplicateEmail(ServiceError):
    type = "CONFLICT"
    code = "duplicate_email"
    message = "User with this email already exists"
    status_code = 422


class InvalidCredentials(ServiceError):
    # same message for unknown email and wrong password
    type = "AUTH_ERROR"
    code = "invalid_credentials"
    message = "Invalid Email or Password"
    status_code = 422


class AuthenticationFailure(ServiceError):
    type = "AUTH_ERROR"
    code = "auth_failed"
    message = "Authentication failed"
    status_code = 401


class NotFoundError(ServiceError):
    type = "NOT_FOUND"
    code = "not_found"
    message = "Resource not found"
    status_code = 404


class BadRequestError(ServiceError):
    type = "VALIDATION"
    code = "bad_request"
    message = "Bad request"
    status_code = 400


class StoreError(ServiceError):
    type = "INTERNAL"
    code = "store_error"
    message = "Store operation failed"
    status_code = 500


def missing_fields(values: Dict[str, Optional[str]]) -> Optional[Dict[str, Optional[str]]]:
    """
    Per-field report for required string inputs. Returns None when every
    field is present and non-blank, else {"field": "Field is required" | None}.
    """
    report = {
        name: None if (value is not None and str(value).strip()) else f"{name.capitalize()} is required"
        for name, value in values.items()
    }
    if any(report.values()):
        return report
    return None
