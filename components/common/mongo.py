from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from .errors import StoreError


def object_id_or_none(value) -> Optional[ObjectId]:
    """Parse a client-supplied id; anything that is not an ObjectId resolves to None."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def object_ids(values: Iterable[str]) -> List[ObjectId]:
    return [oid for oid in (object_id_or_none(v) for v in values) if oid is not None]


def store_error(op: str, ex: PyMongoError) -> StoreError:
    return StoreError(f"Error {op}", details={"cause": str(ex)})


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # BSON dates carry no offset; they are always UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
