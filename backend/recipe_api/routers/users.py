"""
Users router for registration, login, logout and webhook registration.
"""
from fastapi import APIRouter, Depends, Request, status

from recipe_api.container import Services
from recipe_api.dependencies.auth import BearerToken, CurrentPrincipal
from recipe_api.dependencies.services import get_services, get_user_service
from recipe_api.errors import AuthError, AuthErrorKind
from recipe_api.models.user import UserRole
from recipe_api.schemas.auth import (
    ActionLink,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisterRequest,
    RegisterResponse,
    WebhookRegisterRequest,
    WebhookRegisterResponse,
)
from recipe_api.services.user_service import UserService

router = APIRouter(prefix="/user", tags=["Users"])


def _login_link(request: Request) -> ActionLink:
    return ActionLink(href=str(request.url_for("login")), method="POST")


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: Request,
    body: RegisterRequest,
    users: UserService = Depends(get_user_service),
    services: Services = Depends(get_services),
):
    """
    Register a new user account and receive its webhook secret.

    - **username**: Unique username
    - **password**: Password (10 to 256 characters)
    - **email**: Valid email address (must be unique)
    - **role**: `user` (default) or `admin`
    """
    if body.role == UserRole.ADMIN and not services.settings.allow_admin_self_registration:
        raise AuthError("Admin registration is disabled", kind=AuthErrorKind.INSUFFICIENT_ROLE)

    user, secret = await users.register(body.model_dump())
    return RegisterResponse(
        id=user.id,
        webhook_secret=secret,
        message="User created.",
        links=[_login_link(request)],
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Login and get access token",
)
async def login(
    body: LoginRequest,
    users: UserService = Depends(get_user_service),
):
    """
    Authenticate with username and password to receive an RS256 JWT.

    Pass it to protected endpoints as `Authorization: Bearer <token>`.
    """
    principal = await users.login(body.username, body.password)
    token = await users.generate_token(principal)
    return LoginResponse(access_token=token)


@router.post(
    "/logout",
    response_model=LogoutResponse,
    status_code=status.HTTP_200_OK,
    summary="Revoke the current access token",
)
async def logout(
    request: Request,
    token: BearerToken,
    principal: CurrentPrincipal,
    users: UserService = Depends(get_user_service),
):
    """Revoke the bearer token used for this request."""
    await users.log_out(token)
    return LogoutResponse(message="You have logged out.", links=[_login_link(request)])


@router.post(
    "/webhook",
    response_model=WebhookRegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a webhook URL",
)
async def register_webhook(
    body: WebhookRegisterRequest,
    principal: CurrentPrincipal,
    users: UserService = Depends(get_user_service),
):
    """
    Register or overwrite the webhook URL of a user and return its secret.

    Users may only register their own webhook; admins may register any.
    Tokens carry the webhook URL, so log in again after changing it.
    """
    user_id = body.id or principal.id
    if user_id != principal.id and principal.role != UserRole.ADMIN:
        raise AuthError("Unauthorized", kind=AuthErrorKind.INSUFFICIENT_ROLE)

    user = await users.save_webhook(body.webhook, user_id)
    return WebhookRegisterResponse(webhook_secret=user.secret)
