from __future__ import annotations
import time
from typing import Optional

import jwt

from .contracts import ClockPort, TokenClaims, TokenCodecPort
from .errors import InvalidSignature, MalformedToken, TokenExpired


class SystemClock(ClockPort):
    def now_utc_ts(self) -> int:
        return int(time.time())


class JWTTokenCodec(TokenCodecPort):
    """
    Signs {sub, iat[, exp]} with a process-wide secret via PyJWT.
    Stateless: the same token and secret always verify the same way.
    """
    def __init__(self, secret: str, *, algorithm: str = "HS256", ttl_seconds: Optional[int] = None,
                 clock: Optional[ClockPort] = None):
        if not secret:
            raise ValueError("JWTTokenCodec requires non-empty secret")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl_seconds or None
        self._clock = clock or SystemClock()

    @property
    def ttl_seconds(self) -> Optional[int]:
        return self._ttl

    def issue(self, user_id: str) -> str:
        if not user_id:
            raise ValueError("user_id is required")
        now = self._clock.now_utc_ts()
        claims = {"sub": str(user_id), "iat": now}
        if self._ttl:
            claims["exp"] = now + self._ttl
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "iat"]},
            )
        except jwt.ExpiredSignatureError as ex:
            raise TokenExpired("Token expired") from ex
        # InvalidSignatureError subclasses DecodeError; order matters
        except jwt.InvalidSignatureError as ex:
            raise InvalidSignature("Signature mismatch") from ex
        except jwt.InvalidTokenError as ex:
            raise MalformedToken(f"Invalid token format: {ex}") from ex

        try:
            return TokenClaims(sub=payload["sub"], iat=payload["iat"], exp=payload.get("exp"))
        except (KeyError, ValueError) as ex:
            raise MalformedToken("Invalid token claims") from ex
