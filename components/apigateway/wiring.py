from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from fastapi import FastAPI
from pymongo import MongoClient

from components.authservice import AuthConfig, AuthService, JWTTokenCodec, PasswordHasher, RequestAuthenticator
from components.authservice.contracts import ClockPort, UserRepoPort
from components.authservice.repository_mongo import MongoUserRepo
from components.blobstorageadapter import BlobService, BlobSettings, make_blob_service
from components.postservice import PostService
from components.postservice.contracts import PostRepoPort
from components.postservice.repository_mongo import MongoPostRepo
from .settings import AppSettings

logger = logging.getLogger("apigateway")


@dataclass
class Services:
    auth_service: AuthService
    authenticator: RequestAuthenticator
    post_service: PostService
    blob_service: BlobService
    closers: List[Callable[[], None]] = field(default_factory=list)

    def attach(self, app: FastAPI) -> None:
        app.state.auth_service = self.auth_service
        app.state.authenticator = self.authenticator
        app.state.post_service = self.post_service
        app.state.blob_service = self.blob_service

    def close(self) -> None:
        for close in self.closers:
            close()


def assemble(
    *,
    users: UserRepoPort,
    posts: PostRepoPort,
    blob_service: BlobService,
    auth_cfg: AuthConfig,
    clock: Optional[ClockPort] = None,
) -> Services:
    """Wire services over already-built stores. Shared by production and tests."""
    if not auth_cfg.jwt_secret:
        raise RuntimeError("JWT_SECRET must be set")
    codec = JWTTokenCodec(
        auth_cfg.jwt_secret,
        algorithm=auth_cfg.jwt_algorithm,
        ttl_seconds=auth_cfg.jwt_ttl_seconds,
        clock=clock,
    )
    hasher = PasswordHasher(auth_cfg.password_hash_scheme, auth_cfg.password_hash_rounds)
    return Services(
        auth_service=AuthService(user_repo=users, codec=codec, hasher=hasher,
                                 token_ttl_seconds=auth_cfg.jwt_ttl_seconds),
        authenticator=RequestAuthenticator(codec=codec, user_repo=users),
        post_service=PostService(posts=posts, users=users, url_for=blob_service.url_for),
        blob_service=blob_service,
    )


def build_services(settings: AppSettings, auth_cfg: AuthConfig, blob_cfg: BlobSettings) -> Services:
    """Mongo + object-store backed services for a running deployment."""
    client = MongoClient(settings.mongodb_uri, tz_aware=True)
    db = client.get_default_database(default=settings.mongodb_db)
    users = MongoUserRepo(db)
    posts = MongoPostRepo(db)
    users.ensure_indexes()
    posts.ensure_indexes()
    logger.info("mongo connected db=%s", db.name)

    services = assemble(users=users, posts=posts, blob_service=make_blob_service(blob_cfg), auth_cfg=auth_cfg)
    services.closers.append(client.close)
    return services
