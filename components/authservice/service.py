from __future__ import annotations
import logging
from typing import Optional

from components.common.errors import DuplicateEmail, InvalidCredentials, ValidationError, missing_fields
from .contracts import (
    AuthErrorCodes, LoginRequest, LoginResult, PasswordHasherPort,
    RegisterRequest, TokenCodecPort, User, UserRecord, UserRepoPort,
)

log = logging.getLogger("authservice")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    def __init__(
        self,
        *,
        user_repo: UserRepoPort,
        codec: TokenCodecPort,
        hasher: PasswordHasherPort,
        token_ttl_seconds: Optional[int] = None,
    ):
        self.user_repo = user_repo
        self.codec = codec
        self.hasher = hasher
        self.token_ttl_seconds = token_ttl_seconds or None

    # --------- Core operations ----------
    def register(self, req: RegisterRequest) -> User:
        report = missing_fields({"name": req.name, "email": req.email, "password": req.password})
        if report:
            raise ValidationError(code=AuthErrorCodes.MISSING_FIELDS, details={"fields": report})

        email = normalize_email(req.email)
        # Pre-check only gives a friendly early answer; insert() is the guarantee.
        if self.user_repo.get_by_email(email) is not None:
            log.info("register.rejected duplicate email")
            raise DuplicateEmail()

        record = UserRecord(name=req.name.strip(), email=email, password_hash=self.hasher.hash(req.password))
        stored = self.user_repo.insert(record)
        log.info("register ok user_id=%s", stored.id)
        return stored.public()

    def login(self, req: LoginRequest) -> LoginResult:
        report = missing_fields({"email": req.email, "password": req.password})
        if report:
            raise ValidationError(code=AuthErrorCodes.MISSING_FIELDS, details={"fields": report})

        record = self.user_repo.get_by_email(normalize_email(req.email))
        if record is None:
            # same hashing cost as a wrong password, so timing does not reveal the email
            self.hasher.dummy_verify()
            log.info("login.rejected bad credentials")
            raise InvalidCredentials()
        if not self.hasher.verify(req.password, record.password_hash):
            log.info("login.rejected bad credentials")
            raise InvalidCredentials()

        token = self.codec.issue(record.id)
        log.info("login ok user_id=%s", record.id)
        return LoginResult(token=token, expires_in=self.token_ttl_seconds)
