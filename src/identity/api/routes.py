"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends, Response
from protean.utils.globals import current_domain

from identity.api.deps import current_user, require_admin, session_id
from identity.api.schemas import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateProfileRequest,
    UserResponse,
)
from identity.user.authentication import LogIn, LogOut, resolve_session
from identity.user.password import ChangePassword, ResetPassword, request_password_reset
from identity.user.profile import UpdateProfile, get_user, list_users
from identity.user.registration import RegisterUser
from identity.user.user import User
from shared.config import get_settings
from shared.schemas import MessageResponse

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])
users_router = APIRouter(prefix="/api/users", tags=["users"])


def _set_session_cookie(response: Response, sid: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sid,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


@auth_router.post("/register", status_code=201, response_model=UserResponse)
async def register(body: RegisterRequest) -> UserResponse:
    command = RegisterUser(
        name=body.name,
        business_name=body.business_name,
        gstin=body.gstin,
        email=body.email,
        password=body.password,
        phone_number=body.phone_number,
        address=body.address,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return UserResponse.model_validate(get_user(user_id))


@auth_router.post("/login", response_model=UserResponse)
async def login(body: LoginRequest, response: Response) -> UserResponse:
    sid = current_domain.process(LogIn(identifier=body.email, password=body.password), asynchronous=False)
    _set_session_cookie(response, sid)
    return UserResponse.model_validate(resolve_session(sid))


@auth_router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, sid: str | None = Depends(session_id)) -> MessageResponse:
    if sid:
        current_domain.process(LogOut(sid=sid), asynchronous=False)
    response.delete_cookie(get_settings().session_cookie_name)
    return MessageResponse(message="Logged out successfully")


@auth_router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(current_user)) -> UserResponse:
    return UserResponse.model_validate(user)


@auth_router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(body: ForgotPasswordRequest) -> MessageResponse:
    request_password_reset(body.email)
    return MessageResponse(message="If that email is registered, a reset link has been sent.")


@auth_router.post("/reset-password", response_model=MessageResponse)
async def reset_password(body: ResetPasswordRequest) -> MessageResponse:
    current_domain.process(ResetPassword(token=body.token, new_password=body.password), asynchronous=False)
    return MessageResponse(message="Password has been reset. Please log in.")


@users_router.get("", response_model=list[UserResponse])
async def get_users(_admin: User = Depends(require_admin)) -> list[UserResponse]:
    return [UserResponse.model_validate(user) for user in list_users()]


@users_router.put("/{user_id}/password", response_model=MessageResponse)
async def change_password(
    user_id: str, body: ChangePasswordRequest, user: User = Depends(current_user)
) -> MessageResponse:
    command = ChangePassword(
        actor_id=str(user.id),
        actor_is_admin=user.is_admin,
        user_id=user_id,
        current_password=body.current_password,
        new_password=body.new_password,
    )
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Password updated successfully")


@users_router.put("/{user_id}/profile", response_model=UserResponse)
async def update_profile(user_id: str, body: UpdateProfileRequest, user: User = Depends(current_user)) -> UserResponse:
    command = UpdateProfile(
        actor_id=str(user.id),
        actor_is_admin=user.is_admin,
        user_id=user_id,
        name=body.name,
        business_name=body.business_name,
        gstin=body.gstin,
        phone_number=body.phone_number,
        address=body.address,
    )
    current_domain.process(command, asynchronous=False)
    return UserResponse.model_validate(get_user(user_id))
