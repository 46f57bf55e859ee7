from __future__ import annotations
from typing import Annotated, Optional

from fastapi import Depends, Header, Request

from .authenticator import RequestAuthenticator
from .contracts import AuthContext
from .service import AuthService


def get_auth_service(request: Request) -> AuthService:
    """Auth service wired onto app state by the gateway."""
    return request.app.state.auth_service


def get_authenticator(request: Request) -> RequestAuthenticator:
    return request.app.state.authenticator


def get_authorization_header(authorization: Optional[str] = Header(default=None, alias="Authorization")) -> Optional[str]:
    """
    Extract the Authorization header value (e.g., 'Bearer <token>').
    Using Header() ensures we get a plain string during real FastAPI requests.
    """
    return authorization


def require_user(
    authenticator: RequestAuthenticator = Depends(get_authenticator),
    authorization: Optional[str] = Depends(get_authorization_header),
) -> AuthContext:
    """
    Protected-route dependency. Raises AuthenticationFailure / StoreError,
    which the gateway renders; the handler only runs with a resolved user.
    """
    return authenticator.authenticate(authorization)


CurrentUser = Annotated[AuthContext, Depends(require_user)]
