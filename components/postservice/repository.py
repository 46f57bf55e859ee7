from __future__ import annotations

import threading
import uuid
from typing import Dict, List, Optional

from .contracts import Post, PostRepoPort


class InMemoryPostRepo(PostRepoPort):
    """
    In-memory post store for tests and local runs.
    Like/unlike mutate under the lock, so concurrent likes are never lost.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._posts: Dict[str, Post] = {}

    def insert(self, post: Post) -> Post:
        with self._lock:
            stored = post.model_copy(update={"id": post.id or uuid.uuid4().hex, "likes": list(post.likes)})
            self._posts[stored.id] = stored
            return stored.model_copy(deep=True)

    def _ordered(self, posts: List[Post]) -> List[Post]:
        # sorted() is stable: equal timestamps keep insertion order
        return [p.model_copy(deep=True) for p in sorted(posts, key=lambda p: p.created_at)]

    def list_all(self) -> List[Post]:
        with self._lock:
            return self._ordered(list(self._posts.values()))

    def list_by_author(self, user_id: str) -> List[Post]:
        with self._lock:
            return self._ordered([p for p in self._posts.values() if p.post_by == user_id])

    def add_like(self, post_id: str, user_id: str) -> Optional[Post]:
        with self._lock:
            post = self._posts.get(post_id)
            if post is None:
                return None
            if user_id not in post.likes:
                post.likes.append(user_id)
            return post.model_copy(deep=True)

    def remove_like(self, post_id: str, user_id: str) -> Optional[Post]:
        with self._lock:
            post = self._posts.get(post_id)
            if post is None:
                return None
            post.likes = [uid for uid in post.likes if uid != user_id]
            return post.model_copy(deep=True)
