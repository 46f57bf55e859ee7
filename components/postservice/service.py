from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from components.authservice.contracts import AuthContext, UserRepoPort
from components.common.errors import ValidationError, missing_fields
from .contracts import CreatePostRequest, Post, PostAuthor, PostRepoPort, PostView
from .errors import PostErrorCodes, no_posts, post_not_found

logger = logging.getLogger("postservice")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostService:
    """
    Post handlers scoped by the authenticated identity.

    "Mine" is a filter on post_by == ctx.user_id. Likes are set-add /
    set-remove of ctx.user_id done atomically by the repo; liking your own
    post is allowed.
    """

    def __init__(
        self,
        *,
        posts: PostRepoPort,
        users: UserRepoPort,
        url_for: Optional[Callable[[str], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.posts = posts
        self.users = users
        self.url_for = url_for
        self.clock = clock or _utcnow

    def _view(self, post: Post, author: Optional[PostAuthor]) -> PostView:
        image_url = self.url_for(post.photo) if (post.photo and self.url_for) else None
        return PostView(
            id=post.id,
            title=post.title,
            body=post.body,
            photo=post.photo,
            image_url=image_url,
            likes=list(post.likes),
            post_by=author,
            created_at=post.created_at,
        )

    def _populate(self, posts: Iterable[Post]) -> List[PostView]:
        posts = list(posts)
        users = self.users.get_many({p.post_by for p in posts})
        views = []
        for post in posts:
            rec = users.get(post.post_by)
            author = PostAuthor(id=rec.id, name=rec.name) if rec else None
            views.append(self._view(post, author))
        return views

    def list_posts(self) -> List[PostView]:
        posts = self.posts.list_all()
        if not posts:
            raise no_posts()
        logger.info("posts.list ok count=%s", len(posts))
        return self._populate(posts)

    def list_my_posts(self, ctx: AuthContext) -> List[PostView]:
        posts = self.posts.list_by_author(ctx.user_id)
        if not posts:
            raise no_posts()
        logger.info("posts.mine ok user_id=%s count=%s", ctx.user_id, len(posts))
        return self._populate(posts)

    def create_post(self, ctx: AuthContext, req: CreatePostRequest) -> PostView:
        report = missing_fields({"title": req.title, "body": req.body})
        if report:
            raise ValidationError(code=PostErrorCodes.MISSING_FIELDS, details={"fields": report})

        photo = req.photo.strip() if req.photo and req.photo.strip() else None
        post = self.posts.insert(Post(
            title=req.title.strip(),
            body=req.body,
            photo=photo,
            likes=[],
            post_by=ctx.user_id,
            created_at=self.clock(),
        ))
        logger.info("posts.create ok post_id=%s user_id=%s", post.id, ctx.user_id)
        return self._view(post, PostAuthor(id=ctx.user_id, name=ctx.name))

    def like_post(self, ctx: AuthContext, post_id: str) -> PostView:
        post = self.posts.add_like(post_id, ctx.user_id)
        if post is None:
            logger.info("posts.like not_found post_id=%s", post_id)
            raise post_not_found()
        logger.info("posts.like ok post_id=%s user_id=%s likes=%s", post_id, ctx.user_id, len(post.likes))
        return self._populate([post])[0]

    def unlike_post(self, ctx: AuthContext, post_id: str) -> PostView:
        post = self.posts.remove_like(post_id, ctx.user_id)
        if post is None:
            logger.info("posts.unlike not_found post_id=%s", post_id)
            raise post_not_found()
        logger.info("posts.unlike ok post_id=%s user_id=%s likes=%s", post_id, ctx.user_id, len(post.likes))
        return self._populate([post])[0]
