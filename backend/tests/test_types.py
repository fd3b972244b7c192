"""
Meigen Backend — Column Type & Configuration Tests
==================================================

What we test:
    ✅ EpochSeconds stores whole seconds and returns aware UTC datetimes
    ✅ Naive datetimes are treated as UTC
    ✅ DATABASE_URL accepts only the two async drivers
    ✅ select_backend() maps URLs to store backends
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from meigen.config import Settings
from meigen.database import EmbeddedSQLiteBackend, ManagedPostgresBackend, select_backend
from meigen.models.types import EpochSeconds, utcnow


class TestEpochSeconds:

    def setup_method(self):
        self.type = EpochSeconds()

    def test_aware_datetime_to_seconds(self):
        value = datetime(2026, 1, 15, 12, 0, 30, 999999, tzinfo=timezone.utc)
        assert self.type.process_bind_param(value, None) == 1768478430

    def test_naive_is_utc(self):
        naive = datetime(2026, 1, 15, 12, 0, 30)
        aware = naive.replace(tzinfo=timezone.utc)
        assert self.type.process_bind_param(naive, None) == self.type.process_bind_param(aware, None)

    def test_offset_is_normalised(self):
        jst = timezone(timedelta(hours=9))
        value = datetime(2026, 1, 15, 21, 0, 30, tzinfo=jst)
        assert self.type.process_bind_param(value, None) == 1768478430

    def test_result_is_aware_utc(self):
        result = self.type.process_result_value(1768478430, None)
        assert result == datetime(2026, 1, 15, 12, 0, 30, tzinfo=timezone.utc)
        assert result.tzinfo is not None

    def test_none_passes_through(self):
        assert self.type.process_bind_param(None, None) is None
        assert self.type.process_result_value(None, None) is None

    def test_utcnow_has_no_sub_second_part(self):
        assert utcnow().microsecond == 0


class TestDatabaseUrl:

    @pytest.mark.parametrize("url", [
        "sqlite+aiosqlite:///./local.db",
        "postgresql+asyncpg://user:pass@db:5432/meigen",
    ])
    def test_accepted(self, url):
        assert Settings(database_url=url).database_url == url

    @pytest.mark.parametrize("url", ["sqlite:///./local.db", "mysql://db/meigen"])
    def test_rejected(self, url):
        with pytest.raises(PydanticValidationError):
            Settings(database_url=url)

    def test_backend_selection(self):
        assert isinstance(select_backend("sqlite+aiosqlite://"), EmbeddedSQLiteBackend)
        assert isinstance(
            select_backend("postgresql+asyncpg://db/meigen"), ManagedPostgresBackend
        )
        with pytest.raises(ValueError):
            select_backend("mysql+aiomysql://db/meigen")

    def test_production_check_lists_missing_secrets(self):
        with pytest.raises(ValueError, match="CRON_SECRET"):
            Settings(admin_password="x", cron_secret="").validate_required_for_production()
