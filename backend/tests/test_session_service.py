"""
Meigen Backend — Session Manager Tests
======================================

What we test:
    ✅ Wrong password → UnauthorizedError, no row written
    ✅ Missing ADMIN_PASSWORD → InternalError
    ✅ Login issues a distinct random token per call, expiring in 7 days
    ✅ validate(): missing / unknown / expired tokens → None
    ✅ Expired rows are deleted when presented
    ✅ require_auth() passes until expires_at and fails after
    ✅ logout() is idempotent
"""

from datetime import timedelta
from unittest.mock import patch

import pytest
from sqlalchemy import func, select

from meigen.config import settings
from meigen.exceptions import InternalError, UnauthorizedError
from meigen.models.session import AdminSession
from meigen.models.types import utcnow
from meigen.services.session_service import SessionService

ADMIN_PASSWORD = settings.admin_password


async def count_sessions(db) -> int:
    result = await db.execute(select(func.count(AdminSession.id)))
    return result.scalar()


class TestLogin:

    def setup_method(self):
        self.service = SessionService()

    @pytest.mark.asyncio
    async def test_wrong_password_is_unauthorized(self, db_session):
        with pytest.raises(UnauthorizedError):
            await self.service.login(db_session, "not-the-password")
        assert await count_sessions(db_session) == 0

    @pytest.mark.asyncio
    async def test_unconfigured_password_is_internal_error(self, mock_db_session):
        with patch.object(settings, "admin_password", ""):
            with pytest.raises(InternalError):
                await self.service.login(mock_db_session, "anything")
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_creates_session_expiring_in_seven_days(self, db_session):
        before = utcnow()
        session = await self.service.login(db_session, ADMIN_PASSWORD)

        assert session.id is not None
        assert len(session.token) >= 32
        expected = before + timedelta(days=7)
        assert abs((session.expires_at - expected).total_seconds()) <= 2

    @pytest.mark.asyncio
    async def test_concurrent_logins_coexist(self, db_session):
        first = await self.service.login(db_session, ADMIN_PASSWORD)
        second = await self.service.login(db_session, ADMIN_PASSWORD)

        assert first.token != second.token
        assert await count_sessions(db_session) == 2
        assert await self.service.validate(db_session, first.token) is not None
        assert await self.service.validate(db_session, second.token) is not None


class TestValidate:

    def setup_method(self):
        self.service = SessionService()

    @pytest.mark.asyncio
    async def test_missing_token_is_not_an_error(self, mock_db_session):
        assert await self.service.validate(mock_db_session, None) is None
        assert await self.service.validate(mock_db_session, "") is None
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_token(self, db_session):
        assert await self.service.validate(db_session, "no-such-token") is None

    @pytest.mark.asyncio
    async def test_expired_session_is_deleted(self, db_session):
        session = await self.service.login(db_session, ADMIN_PASSWORD)
        session.expires_at = utcnow() - timedelta(seconds=1)
        await db_session.commit()

        assert await self.service.validate(db_session, session.token) is None
        assert await count_sessions(db_session) == 0

    @pytest.mark.asyncio
    async def test_require_auth_until_expiry(self, db_session):
        session = await self.service.login(db_session, ADMIN_PASSWORD)
        await db_session.commit()

        assert (await self.service.require_auth(db_session, session.token)).id == session.id

        after_expiry = session.expires_at + timedelta(seconds=1)
        with patch("meigen.services.session_service.utcnow", return_value=after_expiry):
            with pytest.raises(UnauthorizedError):
                await self.service.require_auth(db_session, session.token)

        # the expired row is gone, even back at the original time
        assert await self.service.validate(db_session, session.token) is None

    @pytest.mark.asyncio
    async def test_require_auth_without_token(self, mock_db_session):
        with pytest.raises(UnauthorizedError):
            await self.service.require_auth(mock_db_session, None)


class TestLogout:

    def setup_method(self):
        self.service = SessionService()

    @pytest.mark.asyncio
    async def test_logout_removes_session(self, db_session):
        session = await self.service.login(db_session, ADMIN_PASSWORD)

        assert await self.service.logout(db_session, session.token) is True
        assert await self.service.validate(db_session, session.token) is None

    @pytest.mark.asyncio
    async def test_logout_is_idempotent(self, db_session):
        assert await self.service.logout(db_session, "never-issued") is False
        assert await self.service.logout(db_session, None) is False
