from __future__ import annotations
from fastapi import APIRouter, Depends, Request, status

from components.common.contracts import UWFResponse
from components.common.responses import uwf_ok
from .contracts import LoginRequest, ProtectedResult, RegisterRequest, RegisterResult, User
from .deps import CurrentUser, get_auth_service
from .service import AuthService

router = APIRouter(tags=["auth"])

@router.post("/register", response_model=UWFResponse, status_code=status.HTTP_201_CREATED)
def register(request: Request, req: RegisterRequest, svc: AuthService = Depends(get_auth_service)):
    user = svc.register(req)
    return uwf_ok(request, RegisterResult(user=user))

@router.post("/login", response_model=UWFResponse)
def login(request: Request, req: LoginRequest, svc: AuthService = Depends(get_auth_service)):
    return uwf_ok(request, svc.login(req))

@router.get("/protected", response_model=UWFResponse)
def protected(request: Request, current_user: CurrentUser):
    user = User(id=current_user.user_id, name=current_user.name, email=current_user.email)
    return uwf_ok(request, ProtectedResult(user=user))
