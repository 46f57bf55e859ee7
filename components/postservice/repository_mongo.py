from __future__ import annotations

from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from components.common.mongo import as_utc, object_id_or_none, store_error
from .contracts import Post, PostRepoPort


def _ref(user_id: str):
    # user references are stored as ObjectIds when they parse as one
    oid = object_id_or_none(user_id)
    return oid if oid is not None else user_id


class MongoPostRepo(PostRepoPort):
    """
    Posts collection with the legacy document layout
    {_id, title, body, photo, likes: [ObjectId], postBy: ObjectId, createdAt}.
    """

    _ORDER = [("createdAt", ASCENDING), ("_id", ASCENDING)]

    def __init__(self, db: Database, collection: str = "posts"):
        self._posts = db[collection]

    def ensure_indexes(self) -> None:
        try:
            self._posts.create_index([("postBy", ASCENDING), ("createdAt", ASCENDING)], name="post_by_created")
            self._posts.create_index(self._ORDER, name="created")
        except PyMongoError as ex:
            raise store_error("creating post indexes", ex) from ex

    @staticmethod
    def _to_post(doc: Dict[str, Any]) -> Post:
        return Post(
            id=str(doc["_id"]),
            title=doc.get("title", ""),
            body=doc.get("body", ""),
            photo=doc.get("photo"),
            likes=[str(uid) for uid in doc.get("likes", [])],
            post_by=str(doc.get("postBy", "")),
            created_at=as_utc(doc["createdAt"]),
        )

    def insert(self, post: Post) -> Post:
        doc = {
            "title": post.title,
            "body": post.body,
            "photo": post.photo,
            "likes": [_ref(uid) for uid in post.likes],
            "postBy": _ref(post.post_by),
            "createdAt": post.created_at,
        }
        try:
            res = self._posts.insert_one(doc)
        except PyMongoError as ex:
            raise store_error("creating post", ex) from ex
        return post.model_copy(update={"id": str(res.inserted_id)})

    def _find(self, query: Dict[str, Any], op: str) -> List[Post]:
        try:
            docs = list(self._posts.find(query).sort(self._ORDER))
        except PyMongoError as ex:
            raise store_error(op, ex) from ex
        return [self._to_post(d) for d in docs]

    def list_all(self) -> List[Post]:
        return self._find({}, "fetching posts")

    def list_by_author(self, user_id: str) -> List[Post]:
        return self._find({"postBy": _ref(user_id)}, "getting posts")

    def _update_likes(self, post_id: str, update: Dict[str, Any], op: str) -> Optional[Post]:
        oid = object_id_or_none(post_id)
        if oid is None:
            return None
        try:
            doc = self._posts.find_one_and_update({"_id": oid}, update, return_document=ReturnDocument.AFTER)
        except PyMongoError as ex:
            raise store_error(op, ex) from ex
        return self._to_post(doc) if doc else None

    def add_like(self, post_id: str, user_id: str) -> Optional[Post]:
        return self._update_likes(post_id, {"$addToSet": {"likes": _ref(user_id)}}, "liking post")

    def remove_like(self, post_id: str, user_id: str) -> Optional[Post]:
        return self._update_likes(post_id, {"$pull": {"likes": _ref(user_id)}}, "unliking post")
