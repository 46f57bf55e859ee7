from __future__ import annotations
from datetime import datetime
from typing import Dict, Iterable, Literal, Optional, Protocol
from pydantic import BaseModel, ConfigDict

# ---------- Domain Models ----------
class User(BaseModel):
    """Public view of a user; safe to return to clients."""
    id: str
    name: str
    email: str

class UserRecord(BaseModel):
    """Stored form of a user. Never leaves the auth boundary."""
    id: Optional[str] = None
    name: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None

    def public(self) -> User:
        return User(id=self.id, name=self.name, email=self.email)

class AuthContext(BaseModel):
    """Result of a successful bearer authentication, handed to handlers as a parameter."""
    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str
    email: str

class TokenClaims(BaseModel):
    sub: str
    iat: int
    exp: Optional[int] = None

# ---------- Service I/O ----------
class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: Optional[str] = None
    password: Optional[str] = None

class RegisterResult(BaseModel):
    message: str = "User registered successfully"
    user: User

class LoginResult(BaseModel):
    message: str = "Login successful"
    token: str
    token_type: Literal["Bearer"] = "Bearer"
    expires_in: Optional[int] = None

class ProtectedResult(BaseModel):
    message: str = "Protected route"
    user: User

# ---------- Ports (Contracts) ----------
class TokenCodecPort(Protocol):
    """
    Contract for bearer token issuance and verification.
    verify() raises a TokenError subclass (InvalidSignature, MalformedToken, TokenExpired).
    """
    def issue(self, user_id: str) -> str: ...
    def verify(self, token: str) -> TokenClaims: ...

class PasswordHasherPort(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, encoded: str) -> bool: ...
    def dummy_verify(self) -> None: ...

class UserRepoPort(Protocol):
    """
    Contract for the credential store. insert() must enforce email uniqueness
    itself (DuplicateEmail); failures of the backing store surface as StoreError.
    """
    def get_by_email(self, email: str) -> Optional[UserRecord]: ...
    def get_by_id(self, user_id: str) -> Optional[UserRecord]: ...
    def get_many(self, user_ids: Iterable[str]) -> Dict[str, UserRecord]: ...
    def insert(self, record: UserRecord) -> UserRecord: ...

class ClockPort(Protocol):
    def now_utc_ts(self) -> int: ...

# ---------- Errors ----------
class AuthErrorCodes:
    MISSING_FIELDS = "missing_fields"
    DUPLICATE_EMAIL = "duplicate_email"
    BAD_CREDENTIALS = "invalid_credentials"
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    MALFORMED_TOKEN = "malformed_token"
    TOKEN_EXPIRED = "token_expired"
    USER_NOT_FOUND = "user_not_found"
    CONFIG_ERROR = "config_error"
