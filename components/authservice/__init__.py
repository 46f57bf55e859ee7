from .service import AuthService, normalize_email
from .authenticator import RequestAuthenticator
from .crypto import JWTTokenCodec, SystemClock
from .models import PasswordHasher, InMemoryUserRepo
from .config import AuthConfig
from .contracts import AuthContext, User, UserRecord
from .deps import CurrentUser, require_user, get_auth_service
from .errors import TokenError, InvalidSignature, MalformedToken, TokenExpired
from .routes import router as auth_router

__all__ = [
    "AuthService",
    "normalize_email",
    "RequestAuthenticator",
    "JWTTokenCodec",
    "SystemClock",
    "PasswordHasher",
    "InMemoryUserRepo",
    "AuthConfig",
    "AuthContext",
    "User",
    "UserRecord",
    "CurrentUser",
    "require_user",
    "get_auth_service",
    "TokenError",
    "InvalidSignature",
    "MalformedToken",
    "TokenExpired",
    "auth_router",
]
