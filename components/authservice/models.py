from __future__ import annotations
import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from passlib.context import CryptContext

from components.common.errors import DuplicateEmail
from .contracts import PasswordHasherPort, UserRecord, UserRepoPort

class PasswordHasher(PasswordHasherPort):
    """
    Salted slow hash via passlib. `rounds` is the scheme's cost parameter
    (iterations for pbkdf2_sha256, log2 cost for bcrypt).
    """
    def __init__(self, scheme: str = "pbkdf2_sha256", rounds: Optional[int] = None):
        settings = {}
        if rounds:
            settings[f"{scheme}__default_rounds"] = rounds
        self._ctx = CryptContext(schemes=[scheme], deprecated="auto", **settings)

    def hash(self, password: str) -> str:
        return self._ctx.hash(password)

    def verify(self, password: str, encoded: str) -> bool:
        if not encoded:
            return False
        try:
            return self._ctx.verify(password, encoded)
        except (ValueError, TypeError):
            return False

    def dummy_verify(self) -> None:
        """Spend one verify's worth of work without a stored hash (unknown accounts)."""
        self._ctx.dummy_verify()

class InMemoryUserRepo(UserRepoPort):
    """
    Test/dev credential store. Keys by email and id; insert() checks the
    email index under the lock, which plays the role of a unique constraint.
    """
    def __init__(self):
        self._lock = threading.RLock()
        self._by_email: Dict[str, UserRecord] = {}
        self._by_id: Dict[str, UserRecord] = {}

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            return self._by_email.get(email)

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            return self._by_id.get(user_id)

    def get_many(self, user_ids: Iterable[str]) -> Dict[str, UserRecord]:
        with self._lock:
            return {uid: self._by_id[uid] for uid in set(user_ids) if uid in self._by_id}

    def insert(self, record: UserRecord) -> UserRecord:
        with self._lock:
            if record.email in self._by_email:
                raise DuplicateEmail()
            stored = record.model_copy(update={
                "id": record.id or uuid.uuid4().hex,
                "created_at": record.created_at or datetime.now(timezone.utc),
            })
            self._by_email[stored.email] = stored
            self._by_id[stored.id] = stored
            return stored
