import time

import pydantic
import pytest

from components.authservice import InMemoryUserRepo, JWTTokenCodec, RequestAuthenticator
from components.authservice.contracts import UserRecord
from components.common.errors import AuthenticationFailure, StoreError

SECRET = "authn-secret-0123456789abcdef0123456"


class PastClock:
    def now_utc_ts(self):
        return int(time.time()) - 3600


@pytest.fixture
def setup():
    repo = InMemoryUserRepo()
    user = repo.insert(UserRecord(name="Ann", email="ann@x.com", password_hash="x"))
    codec = JWTTokenCodec(SECRET, ttl_seconds=60)
    return RequestAuthenticator(codec=codec, user_repo=repo), codec, user


@pytest.mark.parametrize("header", [None, "", "Token abc", "Basic dXNlcjpwdw==", "abc", "Bearer", "Bearer    "])
def test_rejects_missing_or_non_bearer_header(setup, header):
    authn, _, _ = setup
    with pytest.raises(AuthenticationFailure) as exc:
        authn.authenticate(header)
    assert exc.value.code == "missing_token"
    assert exc.value.status_code == 401


def test_accepts_valid_token(setup):
    authn, codec, user = setup
    ctx = authn.authenticate(f"Bearer {codec.issue(user.id)}")
    assert (ctx.user_id, ctx.name, ctx.email) == (user.id, "Ann", "ann@x.com")


def test_scheme_is_case_insensitive(setup):
    authn, codec, user = setup
    assert authn.authenticate(f"bearer {codec.issue(user.id)}").user_id == user.id


def test_auth_context_is_immutable(setup):
    authn, codec, user = setup
    ctx = authn.authenticate(f"Bearer {codec.issue(user.id)}")
    with pytest.raises(pydantic.ValidationError):
        ctx.user_id = "someone-else"


def test_malformed_token(setup):
    authn, _, _ = setup
    with pytest.raises(AuthenticationFailure) as exc:
        authn.authenticate("Bearer not.a.jwt")
    assert exc.value.code == "malformed_token"
    assert exc.value.message == "Malformed token"


def test_foreign_signature(setup):
    authn, _, user = setup
    token = JWTTokenCodec(SECRET + "-other").issue(user.id)
    with pytest.raises(AuthenticationFailure) as exc:
        authn.authenticate(f"Bearer {token}")
    assert exc.value.code == "invalid_token"
    assert exc.value.message == "Invalid token"


def test_expired_token(setup):
    authn, _, user = setup
    token = JWTTokenCodec(SECRET, ttl_seconds=60, clock=PastClock()).issue(user.id)
    with pytest.raises(AuthenticationFailure) as exc:
        authn.authenticate(f"Bearer {token}")
    assert exc.value.code == "token_expired"
    assert exc.value.message == "Token has expired"


def test_token_for_unknown_user(setup):
    authn, codec, _ = setup
    with pytest.raises(AuthenticationFailure) as exc:
        authn.authenticate(f"Bearer {codec.issue('ghost')}")
    assert exc.value.code == "user_not_found"


def test_store_failure_is_not_an_auth_failure(setup):
    _, codec, user = setup

    class BrokenRepo(InMemoryUserRepo):
        def get_by_id(self, user_id):
            raise StoreError("Error looking up user")

    authn = RequestAuthenticator(codec=codec, user_repo=BrokenRepo())
    with pytest.raises(StoreError):
        authn.authenticate(f"Bearer {codec.issue(user.id)}")
