from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from components.authservice.deps import CurrentUser
from components.common.contracts import UWFResponse
from components.common.responses import uwf_ok
from .contracts import CreatePostRequest, LikeRequest, PostListResult, PostResult
from .service import PostService


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


router = APIRouter(tags=["posts"])


@router.get("/posts", response_model=UWFResponse)
def list_posts(request: Request, current_user: CurrentUser, svc: PostService = Depends(get_post_service)):
    return uwf_ok(request, PostListResult(posts=svc.list_posts()))


@router.post("/create-post", response_model=UWFResponse, status_code=status.HTTP_201_CREATED)
def create_post(request: Request, req: CreatePostRequest, current_user: CurrentUser,
                svc: PostService = Depends(get_post_service)):
    post = svc.create_post(current_user, req)
    return uwf_ok(request, PostResult(message="Post created successfully", post=post))


@router.get("/myposts", response_model=UWFResponse)
def my_posts(request: Request, current_user: CurrentUser, svc: PostService = Depends(get_post_service)):
    return uwf_ok(request, PostListResult(posts=svc.list_my_posts(current_user)))


@router.put("/like-post", response_model=UWFResponse)
def like_post(request: Request, req: LikeRequest, current_user: CurrentUser,
              svc: PostService = Depends(get_post_service)):
    post = svc.like_post(current_user, req.post_id)
    return uwf_ok(request, PostResult(message="Post liked successfully", post=post))


@router.put("/unlike-post", response_model=UWFResponse)
def unlike_post(request: Request, req: LikeRequest, current_user: CurrentUser,
                svc: PostService = Depends(get_post_service)):
    post = svc.unlike_post(current_user, req.post_id)
    return uwf_ok(request, PostResult(message="Post unliked successfully", post=post))
