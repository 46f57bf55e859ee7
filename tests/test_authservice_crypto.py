import time

import jwt
import pytest

from components.authservice.crypto import JWTTokenCodec
from components.authservice.errors import InvalidSignature, MalformedToken, TokenError, TokenExpired

SECRET = "codec-secret-0123456789abcdef0123456789"


class FixedClock:
    def __init__(self, ts: int):
        self.ts = ts

    def now_utc_ts(self) -> int:
        return self.ts


def test_issue_then_verify_returns_user_id():
    codec = JWTTokenCodec(SECRET, ttl_seconds=60)
    claims = codec.verify(codec.issue("user-1"))
    assert claims.sub == "user-1"
    assert claims.exp == claims.iat + 60


def test_verify_is_deterministic():
    codec = JWTTokenCodec(SECRET)
    token = codec.issue("user-1")
    assert codec.verify(token) == codec.verify(token)


def test_zero_ttl_issues_token_without_expiry():
    codec = JWTTokenCodec(SECRET, ttl_seconds=0)
    claims = codec.verify(codec.issue("user-1"))
    assert claims.exp is None
    assert "exp" not in jwt.decode(codec.issue("user-1"), SECRET, algorithms=["HS256"])


def test_token_signed_with_previous_secret_is_rejected():
    token = JWTTokenCodec(SECRET).issue("user-1")
    with pytest.raises(InvalidSignature):
        JWTTokenCodec(SECRET + "-rotated").verify(token)


@pytest.mark.parametrize("segment", [0, 1, 2])
def test_single_flipped_character_is_rejected(segment):
    codec = JWTTokenCodec(SECRET)
    parts = codec.issue("user-1").split(".")
    seg = parts[segment]
    i = len(seg) // 2
    parts[segment] = seg[:i] + ("A" if seg[i] != "A" else "B") + seg[i + 1:]
    with pytest.raises(TokenError):
        codec.verify(".".join(parts))


def test_expired_token_is_reported_as_expired():
    codec = JWTTokenCodec(SECRET, ttl_seconds=60, clock=FixedClock(int(time.time()) - 3600))
    with pytest.raises(TokenExpired):
        codec.verify(codec.issue("user-1"))


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b", "a.b.c.d"])
def test_garbage_is_malformed(token):
    with pytest.raises(MalformedToken):
        JWTTokenCodec(SECRET).verify(token)


def test_token_without_subject_is_malformed():
    token = jwt.encode({"iat": int(time.time())}, SECRET, algorithm="HS256")
    with pytest.raises(MalformedToken):
        JWTTokenCodec(SECRET).verify(token)


def test_unsigned_token_is_rejected():
    token = jwt.encode({"sub": "user-1", "iat": int(time.time())}, None, algorithm="none")
    with pytest.raises(MalformedToken):
        JWTTokenCodec(SECRET).verify(token)


def test_codec_requires_secret():
    with pytest.raises(ValueError):
        JWTTokenCodec("")
