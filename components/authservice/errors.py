from __future__ import annotations
from typing import Optional

from components.common.errors import AuthenticationFailure
from .contracts import AuthErrorCodes


class TokenError(Exception):
    """Base class for token codec failures."""
    code = AuthErrorCodes.INVALID_TOKEN
    client_message = "Invalid token"

class InvalidSignature(TokenError):
    pass

class MalformedToken(TokenError):
    code = AuthErrorCodes.MALFORMED_TOKEN
    client_message = "Malformed token"

class TokenExpired(TokenError):
    code = AuthErrorCodes.TOKEN_EXPIRED
    client_message = "Token has expired"


def make_auth_error(code: str, message: str, *, details: Optional[dict] = None) -> AuthenticationFailure:
    return AuthenticationFailure(message, code=code, details=details)
