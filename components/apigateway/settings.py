from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_name: str = "picshare-api"
    app_version: str = "0.1.0"
    app_env: str = "production"  # "development" exposes internal error details
    log_level: str = "INFO"

    mongodb_uri: str = "mongodb://localhost:27017/instagram-clone"
    mongodb_db: str = "instagram-clone"  # used when the URI names no database

    # /upload has historically been public; flip to require a bearer token
    upload_require_auth: bool = False

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"
