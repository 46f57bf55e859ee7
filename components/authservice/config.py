from __future__ import annotations
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class AuthConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # No default: the signing secret must come from JWT_SECRET.
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    jwt_ttl_seconds: int = Field(default=86400, ge=0)  # 0 = no exp claim
    password_hash_scheme: str = "pbkdf2_sha256"
    password_hash_rounds: int = Field(default=600_000, gt=0)
