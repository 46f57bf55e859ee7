from .contracts import ErrorPayload, MetaPayload, UWFResponse
from .errors import (
    ServiceError, ValidationError, DuplicateEmail, InvalidCredentials,
    AuthenticationFailure, NotFoundError, BadRequestError, StoreError,
)

__all__ = [
    "ErrorPayload",
    "MetaPayload",
    "UWFResponse",
    "ServiceError",
    "ValidationError",
    "DuplicateEmail",
    "InvalidCredentials",
    "AuthenticationFailure",
    "NotFoundError",
    "BadRequestError",
    "StoreError",
]
