from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from pymongo import ASCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from components.common.errors import DuplicateEmail
from components.common.mongo import as_utc, object_id_or_none, object_ids, store_error
from .contracts import UserRecord, UserRepoPort

log = logging.getLogger("authservice")

class MongoUserRepo(UserRepoPort):
    """
    Credential store on a MongoDB collection. Documents keep the legacy
    layout {_id, name, email, password, createdAt} where `password` is the hash.
    """
    def __init__(self, db: Database, collection: str = "users"):
        self._users = db[collection]

    def ensure_indexes(self) -> None:
        # the real uniqueness guarantee for emails
        try:
            self._users.create_index([("email", ASCENDING)], unique=True, name="email_unique")
        except PyMongoError as ex:
            raise store_error("creating user indexes", ex) from ex

    @staticmethod
    def _to_record(doc: Dict[str, Any]) -> UserRecord:
        return UserRecord(
            id=str(doc["_id"]),
            name=doc.get("name", ""),
            email=doc["email"],
            password_hash=doc.get("password", ""),
            created_at=as_utc(doc.get("createdAt")),
        )

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        try:
            doc = self._users.find_one({"email": email})
        except PyMongoError as ex:
            raise store_error("looking up user", ex) from ex
        return self._to_record(doc) if doc else None

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        oid = object_id_or_none(user_id)
        if oid is None:
            return None
        try:
            doc = self._users.find_one({"_id": oid})
        except PyMongoError as ex:
            raise store_error("looking up user", ex) from ex
        return self._to_record(doc) if doc else None

    def get_many(self, user_ids: Iterable[str]) -> Dict[str, UserRecord]:
        oids = object_ids(set(user_ids))
        if not oids:
            return {}
        try:
            docs = list(self._users.find({"_id": {"$in": oids}}))
        except PyMongoError as ex:
            raise store_error("looking up users", ex) from ex
        records = (self._to_record(d) for d in docs)
        return {r.id: r for r in records}

    def insert(self, record: UserRecord) -> UserRecord:
        created_at = record.created_at or datetime.now(timezone.utc)
        doc = {
            "name": record.name,
            "email": record.email,
            "password": record.password_hash,
            "createdAt": created_at,
        }
        try:
            res = self._users.insert_one(doc)
        except DuplicateKeyError as ex:
            log.info("user.insert duplicate email rejected by unique index")
            raise DuplicateEmail() from ex
        except PyMongoError as ex:
            raise store_error("registering user", ex) from ex
        return record.model_copy(update={"id": str(res.inserted_id), "created_at": created_at})
