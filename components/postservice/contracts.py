"""
PostService contracts and ports.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, constr


# --------------------------
# Domain Models
# --------------------------

class Post(BaseModel):
    id: Optional[str] = None
    title: str
    body: str
    photo: Optional[str] = None  # object-store key
    likes: List[str] = Field(default_factory=list)  # user ids, insertion order, unique
    post_by: str  # author user id
    created_at: datetime


class PostAuthor(BaseModel):
    id: str
    name: str


class PostView(BaseModel):
    """Post as returned to clients: author populated, image URL resolved."""
    id: str
    title: str
    body: str
    photo: Optional[str] = None
    image_url: Optional[str] = None
    likes: List[str] = Field(default_factory=list)
    post_by: Optional[PostAuthor] = None
    created_at: datetime


# --------------------------
# Requests / Results
# --------------------------

class CreatePostRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    body: Optional[str] = None
    photo: Optional[str] = None


class LikeRequest(BaseModel):
    # `postId` is the wire name existing clients send
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    post_id: constr(strip_whitespace=True, min_length=1) = Field(alias="postId")


class PostListResult(BaseModel):
    posts: List[PostView]


class PostResult(BaseModel):
    message: str
    post: PostView


# --------------------------
# Ports (Protocols)
# --------------------------

class PostRepoPort(Protocol):
    """
    Post store. Lists come back ordered by created_at ascending (ties in
    insertion order). add_like/remove_like are single atomic set operations
    and return None when the post does not exist.
    """
    def insert(self, post: Post) -> Post:
        ...
    def list_all(self) -> List[Post]:
        ...
    def list_by_author(self, user_id: str) -> List[Post]:
        ...
    def add_like(self, post_id: str, user_id: str) -> Optional[Post]:
        ...
    def remove_like(self, post_id: str, user_id: str) -> Optional[Post]:
        ...
