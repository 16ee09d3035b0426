"""
Authentication API endpoints.

Every flow that issues a session token returns it in the body and sets
it as an http-only cookie.
"""

from datetime import timedelta

from fastapi import APIRouter, Depends, Request, Response

from api.dependencies import get_app_settings, get_auth_service
from api.middleware.auth import get_current_user
from shared.config import Settings
from shared.models import Envelope, TokenEnvelope

from .interfaces import IAuthService
from .models import (
    Account,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
)

router = APIRouter()

TOKEN_COOKIE = "token"


def send_token_response(token: str, response: Response, settings: Settings) -> TokenEnvelope:
    """Attach the session cookie and wrap the token in its envelope."""
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=int(timedelta(days=settings.jwt_cookie_expire_days).total_seconds()),
        httponly=True,
        secure=settings.is_production,
    )
    return TokenEnvelope(token=token)


@router.post("/register", response_model=TokenEnvelope)
async def register(
    request: RegisterRequest,
    response: Response,
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> TokenEnvelope:
    """
    Create an account and sign it in.

    The admin role cannot be chosen here.
    """
    return send_token_response(await auth.register(request), response, settings)


@router.post("/login", response_model=TokenEnvelope)
async def login(
    request: LoginRequest,
    response: Response,
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> TokenEnvelope:
    token = await auth.login(request.email, request.password)
    return send_token_response(token, response, settings)


@router.get("/logout", response_model=Envelope[dict])
async def logout(response: Response) -> Envelope[dict]:
    """Clear the session cookie."""
    response.delete_cookie(TOKEN_COOKIE, httponly=True)
    return Envelope(data={})


@router.get("/me", response_model=Envelope[Account])
async def me(user: Account = Depends(get_current_user)) -> Envelope[Account]:
    return Envelope(data=user)


@router.put("/updatedetails", response_model=Envelope[Account])
async def update_details(
    request: UpdateDetailsRequest,
    user: Account = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> Envelope[Account]:
    return Envelope(data=await auth.update_details(user, request))


@router.put("/updatepassword", response_model=TokenEnvelope)
async def update_password(
    request: UpdatePasswordRequest,
    response: Response,
    user: Account = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> TokenEnvelope:
    token = await auth.update_password(user, request.current_password, request.new_password)
    return send_token_response(token, response, settings)


@router.post("/forgotpassword", response_model=Envelope[str])
async def forgot_password(
    request: ForgotPasswordRequest,
    http_request: Request,
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> Envelope[str]:
    """
    Email a single-use reset link to the account holder.

    The link points at the reset endpoint of this server.
    """
    reset_url_base = (
        f"{str(http_request.base_url).rstrip('/')}{settings.api_prefix}/auth/resetpassword"
    )
    await auth.forgot_password(request.email, reset_url_base)
    return Envelope(data="Email sent")


@router.put("/resetpassword/{token}", response_model=TokenEnvelope)
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    response: Response,
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> TokenEnvelope:
    new_token = await auth.reset_password(token, request.password)
    return send_token_response(new_token, response, settings)
