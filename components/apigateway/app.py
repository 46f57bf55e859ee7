from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from components.authservice import AuthConfig, auth_router
from components.blobstorageadapter import BlobSettings
from components.postservice import posts_router
from .errors import install_error_handlers
from .observability import RequestContextMiddleware, configure_logging, logger
from .routers import media, public
from .settings import AppSettings
from .wiring import Services, build_services


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    services: Optional[Services] = None,
    auth_cfg: Optional[AuthConfig] = None,
    blob_cfg: Optional[BlobSettings] = None,
) -> FastAPI:
    """
    Build the HTTP app. With `services` given (tests) they are used as-is;
    otherwise Mongo/S3 backed services are built on startup.
    """
    settings = settings or AppSettings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned: Optional[Services] = None
        if services is None:
            blob = blob_cfg or BlobSettings()
            owned = build_services(settings, auth_cfg or AuthConfig(), blob)
            owned.attach(app)
            if blob.S3_PUBLIC_READ_POLICY:
                await owned.blob_service.ensure_public_read()
        logger.info("app.start name=%s version=%s env=%s", settings.app_name, settings.app_version, settings.app_env)
        yield
        if owned is not None:
            owned.close()

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings
    if services is not None:
        services.attach(app)

    app.add_middleware(RequestContextMiddleware)
    install_error_handlers(app)

    # Routers
    app.include_router(public.router)
    app.include_router(auth_router)
    app.include_router(posts_router)
    app.include_router(media.router)

    return app

app = create_app()
