# PostService package init
from .service import PostService
from .repository import InMemoryPostRepo
from .routes import router as posts_router, get_post_service
from .contracts import (
    Post,
    PostAuthor,
    PostView,
    CreatePostRequest,
    LikeRequest,
)
