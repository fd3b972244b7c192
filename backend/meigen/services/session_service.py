"""
Meigen Backend — Admin Session Manager
======================================

What:  Password login, opaque-token validation and logout for the single
       admin identity.
Why:   Every mutating route sits behind one shared credential; the browser
       holds an httponly cookie whose value is a random token looked up in
       the `sessions` table.
How:   login() compares against ADMIN_PASSWORD in constant time and stores a
       new row; validate() resolves a token to a live row, deleting it when
       expired; require_auth() turns a miss into UnauthorizedError.

Cookie I/O is not done here. Routes read `request.cookies` and write
`response.set_cookie` / `delete_cookie`; this module only sees token strings.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from meigen.config import settings
from meigen.exceptions import InternalError, UnauthorizedError
from meigen.models.session import AdminSession
from meigen.models.types import utcnow

logger = logging.getLogger(__name__)


class SessionService:

    async def login(self, db: AsyncSession, password: str) -> AdminSession:
        """
        Exchange the admin password for a new session.

        Raises:
            InternalError:     ADMIN_PASSWORD is not configured
            UnauthorizedError: password mismatch
        """
        if not settings.admin_password:
            logger.error("Login attempted but ADMIN_PASSWORD is not configured")
            raise InternalError(message="Admin login is not configured")

        if not secrets.compare_digest(
            password.encode("utf-8"), settings.admin_password.encode("utf-8")
        ):
            logger.warning("Rejected admin login: wrong password")
            raise UnauthorizedError(message="Incorrect password")

        now = utcnow()
        session = AdminSession(
            token=secrets.token_urlsafe(32),
            expires_at=now + timedelta(days=settings.session_duration_days),
            created_at=now,
        )
        db.add(session)
        await db.flush()
        logger.info("Admin session %s created, expires %s", session.id, session.expires_at)
        return session

    async def validate(self, db: AsyncSession, token: Optional[str]) -> Optional[AdminSession]:
        """Live session for `token`, or None. Expired rows are deleted on sight."""
        if not token:
            return None
        result = await db.execute(select(AdminSession).where(AdminSession.token == token))
        session = result.scalar_one_or_none()
        if session is None:
            return None
        if session.is_expired(utcnow()):
            await db.delete(session)
            # committed here: require_auth raises next and the request rolls back
            await db.commit()
            logger.info("Expired admin session %s removed", session.id)
            return None
        return session

    async def require_auth(self, db: AsyncSession, token: Optional[str]) -> AdminSession:
        session = await self.validate(db, token)
        if session is None:
            raise UnauthorizedError()
        return session

    async def logout(self, db: AsyncSession, token: Optional[str]) -> bool:
        """Delete the row for `token`. Returns whether a row existed."""
        if not token:
            return False
        result = await db.execute(delete(AdminSession).where(AdminSession.token == token))
        removed = (result.rowcount or 0) > 0
        if removed:
            logger.info("Admin session logged out")
        return removed


session_service = SessionService()
