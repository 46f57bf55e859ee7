from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import AutoReconnect

from components.common.errors import StoreError
from components.postservice.contracts import Post
from components.postservice.repository_mongo import MongoPostRepo

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_repo():
    coll = MagicMock()
    db = MagicMock()
    db.__getitem__.return_value = coll
    return MongoPostRepo(db), coll


def post_doc(oid, likes=()):
    return {"_id": oid, "title": "t", "body": "b", "photo": None, "likes": list(likes),
            "postBy": ObjectId(), "createdAt": CREATED}


def test_insert_stores_author_as_object_id():
    repo, coll = make_repo()
    author = ObjectId()
    coll.insert_one.return_value = MagicMock(inserted_id=ObjectId())

    repo.insert(Post(title="t", body="b", post_by=str(author), created_at=CREATED))

    doc = coll.insert_one.call_args[0][0]
    assert doc["postBy"] == author
    assert doc["likes"] == []


def test_lists_sort_by_creation_then_id():
    repo, coll = make_repo()
    cursor = coll.find.return_value
    cursor.sort.return_value = [post_doc(ObjectId())]
    author = ObjectId()

    posts = repo.list_by_author(str(author))

    coll.find.assert_called_once_with({"postBy": author})
    cursor.sort.assert_called_once_with([("createdAt", 1), ("_id", 1)])
    assert len(posts) == 1


def test_like_is_single_add_to_set():
    repo, coll = make_repo()
    pid, uid = ObjectId(), ObjectId()
    coll.find_one_and_update.return_value = post_doc(pid, likes=[uid])

    post = repo.add_like(str(pid), str(uid))

    coll.find_one_and_update.assert_called_once_with(
        {"_id": pid}, {"$addToSet": {"likes": uid}}, return_document=ReturnDocument.AFTER
    )
    assert post.likes == [str(uid)]


def test_unlike_is_single_pull():
    repo, coll = make_repo()
    pid, uid = ObjectId(), ObjectId()
    coll.find_one_and_update.return_value = post_doc(pid)

    post = repo.remove_like(str(pid), str(uid))

    coll.find_one_and_update.assert_called_once_with(
        {"_id": pid}, {"$pull": {"likes": uid}}, return_document=ReturnDocument.AFTER
    )
    assert post.likes == []


def test_like_missing_post_returns_none():
    repo, coll = make_repo()
    coll.find_one_and_update.return_value = None
    assert repo.add_like(str(ObjectId()), str(ObjectId())) is None


def test_invalid_post_id_skips_update():
    repo, coll = make_repo()
    assert repo.add_like("nope", str(ObjectId())) is None
    coll.find_one_and_update.assert_not_called()


def test_driver_failure_is_store_error():
    repo, coll = make_repo()
    coll.find_one_and_update.side_effect = AutoReconnect("connection reset")
    with pytest.raises(StoreError) as exc:
        repo.remove_like(str(ObjectId()), str(ObjectId()))
    assert exc.value.message == "Error unliking post"


def test_naive_bson_dates_come_back_as_utc():
    repo, coll = make_repo()
    pid = ObjectId()
    doc = post_doc(pid)
    doc["createdAt"] = datetime(2024, 1, 1)
    coll.find_one_and_update.return_value = doc

    post = repo.add_like(str(pid), str(ObjectId()))

    assert post.created_at.tzinfo is not None
    assert post.created_at.isoformat() == "2024-01-01T00:00:00+00:00"
