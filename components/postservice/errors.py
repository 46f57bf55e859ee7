from __future__ import annotations

from components.common.errors import NotFoundError


class PostErrorCodes:
    MISSING_FIELDS = "missing_fields"
    POST_NOT_FOUND = "post_not_found"
    NO_POSTS = "no_posts"


def post_not_found() -> NotFoundError:
    return NotFoundError("Post not found", code=PostErrorCodes.POST_NOT_FOUND)


def no_posts() -> NotFoundError:
    return NotFoundError("No posts found", code=PostErrorCodes.NO_POSTS)
