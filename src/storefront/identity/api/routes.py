"""FastAPI endpoints for accounts and sessions."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from storefront.identity.api.dependencies import require_user, sign_in, sign_out
from storefront.identity.api.schemas import (
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UpdateProfileRequest,
)
from storefront.identity.user.administration import AdminAlreadyExists, CreateFirstAdmin
from storefront.identity.user.profile import ChangePassword, UpdateProfile
from storefront.identity.user.registration import (
    AuthenticateUser,
    EmailAlreadyRegistered,
    InvalidCredentials,
    RegisterUser,
)
from storefront.identity.user.user import User

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _user_payload(user_id: str) -> dict:
    return current_domain.repository_for(User).get(user_id).to_public_dict()


@router.post("/signup", status_code=201)
async def signup(body: SignupRequest, request: Request):
    try:
        user_id = current_domain.process(
            RegisterUser(email=body.email, password=body.password, full_name=body.full_name),
            asynchronous=False,
        )
    except EmailAlreadyRegistered:
        raise HTTPException(status_code=409, detail="User with this email already exists") from None

    sign_in(request, user_id)
    return JSONResponse(status_code=201, content=_user_payload(user_id))


@router.post("/login")
async def login(body: LoginRequest, request: Request):
    try:
        user_id = current_domain.process(
            AuthenticateUser(email=body.email, password=body.password),
            asynchronous=False,
        )
    except InvalidCredentials as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from None

    sign_in(request, user_id)
    return _user_payload(user_id)


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request) -> MessageResponse:
    sign_out(request)
    return MessageResponse(message="Logged out successfully")


@router.get("/me")
async def me(user: User = Depends(require_user)):
    return user.to_public_dict()


@router.post("/update-profile")
async def update_profile(body: UpdateProfileRequest, user: User = Depends(require_user)):
    current_domain.process(
        UpdateProfile(user_id=str(user.id), **body.model_dump(exclude_none=True)),
        asynchronous=False,
    )
    return _user_payload(str(user.id))


@router.post("/change-password", response_model=MessageResponse)
async def change_password(body: ChangePasswordRequest, user: User = Depends(require_user)) -> MessageResponse:
    current_domain.process(
        ChangePassword(
            user_id=str(user.id),
            current_password=body.current_password,
            new_password=body.new_password,
        ),
        asynchronous=False,
    )
    return MessageResponse(message="Password updated")


@router.post("/create-first-admin", status_code=201)
async def create_first_admin(body: SignupRequest, request: Request):
    try:
        user_id = current_domain.process(
            CreateFirstAdmin(email=body.email, password=body.password, full_name=body.full_name),
            asynchronous=False,
        )
    except AdminAlreadyExists:
        raise HTTPException(status_code=403, detail="An administrator already exists") from None
    except InvalidCredentials as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from None

    sign_in(request, user_id)
    logger.info("First admin signed in", user_id=user_id)
    return JSONResponse(status_code=201, content=_user_payload(user_id))
