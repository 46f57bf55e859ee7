from __future__ import annotations
import logging
from typing import Optional

from .contracts import AuthContext, AuthErrorCodes, TokenCodecPort, UserRepoPort
from .errors import TokenError, make_auth_error

log = logging.getLogger("authservice")

BEARER_PREFIX = "bearer "


class RequestAuthenticator:
    """
    Turns an Authorization header into an AuthContext or rejects it.

    Every rejection is an AuthenticationFailure (401) whose `code` tells the
    cases apart: missing_token, invalid_token, malformed_token, token_expired,
    user_not_found. Store failures during the user lookup propagate as
    StoreError. Read-only; no per-request state is kept.
    """

    def __init__(self, *, codec: TokenCodecPort, user_repo: UserRepoPort):
        self.codec = codec
        self.user_repo = user_repo

    @staticmethod
    def extract_token(authorization: Optional[str]) -> str:
        if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
            log.info("auth.rejected code=%s", AuthErrorCodes.MISSING_TOKEN)
            raise make_auth_error(
                AuthErrorCodes.MISSING_TOKEN,
                "Authorization token required (format: 'Bearer <token>')",
            )
        token = authorization[len(BEARER_PREFIX):].strip()
        if not token:
            log.info("auth.rejected code=%s reason=empty", AuthErrorCodes.MISSING_TOKEN)
            raise make_auth_error(AuthErrorCodes.MISSING_TOKEN, "Authentication token is required")
        return token

    def authenticate(self, authorization: Optional[str]) -> AuthContext:
        token = self.extract_token(authorization)

        try:
            claims = self.codec.verify(token)
        except TokenError as ex:
            log.info("auth.rejected code=%s detail=%s", ex.code, ex)
            raise make_auth_error(ex.code, ex.client_message) from ex

        user = self.user_repo.get_by_id(claims.sub)
        if user is None:
            log.info("auth.rejected code=%s user_id=%s", AuthErrorCodes.USER_NOT_FOUND, claims.sub)
            raise make_auth_error(AuthErrorCodes.USER_NOT_FOUND, "User not found")

        return AuthContext(user_id=user.id, name=user.name, email=user.email)
