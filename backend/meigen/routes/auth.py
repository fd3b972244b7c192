"""
Meigen Backend — Admin Login Routes
===================================

    POST   /api/login   password → session cookie
    DELETE /api/login   drop the session row (if any) and clear the cookie

Cookie attributes: httponly, SameSite=Lax, path=/, expires at the session's
expires_at, Secure when COOKIE_SECURE is set. Repeated failures from one
client are throttled by LoginRateLimitMiddleware before reaching here.
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.config import settings
from meigen.database import get_db_session
from meigen.routes.deps import get_session_token
from meigen.schemas.common import MessageResponse, SuccessResponse, responses
from meigen.schemas.quote import LoginRequest, LoginResponse
from meigen.services.session_service import session_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/login",
    response_model=SuccessResponse[LoginResponse],
    responses=responses(400, 401, 500),
    summary="Log in as admin",
)
async def login(
    body: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
):
    session = await session_service.login(db, body.password)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.token,
        expires=session.expires_at,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return SuccessResponse(
        data=LoginResponse(message="Logged in", expires_at=session.expires_at)
    )


@router.delete(
    "/login",
    response_model=SuccessResponse[MessageResponse],
    summary="Log out",
)
async def logout(
    response: Response,
    token: str | None = Depends(get_session_token),
    db: AsyncSession = Depends(get_db_session),
):
    await session_service.logout(db, token)
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return SuccessResponse(data=MessageResponse(message="Logged out"))
