"""
Shared route dependencies.

    require_admin        401 unless the session cookie maps to a live session
    require_cron_secret  401 unless `Authorization: Bearer <CRON_SECRET>`

All of these run before body validation, so an unauthenticated write with
a malformed body is answered with 401, not 400.
"""

import logging
import secrets
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.config import settings
from meigen.database import get_db_session
from meigen.exceptions import InternalError, UnauthorizedError
from meigen.models.session import AdminSession
from meigen.services.session_service import session_service

logger = logging.getLogger(__name__)


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.session_cookie_name)


async def require_admin(
    db: AsyncSession = Depends(get_db_session),
    token: Optional[str] = Depends(get_session_token),
) -> AdminSession:
    return await session_service.require_auth(db, token)


async def require_cron_secret(
    authorization: Optional[str] = Header(default=None),
) -> None:
    if not settings.cron_secret:
        logger.error("Cron endpoint called but CRON_SECRET is not configured")
        raise InternalError(message="Cron secret is not configured")
    expected = f"Bearer {settings.cron_secret}"
    if authorization is None or not secrets.compare_digest(
        authorization.encode("utf-8"), expected.encode("utf-8")
    ):
        logger.warning("Rejected cron call: bad or missing Authorization header")
        raise UnauthorizedError(message="Invalid cron secret")
