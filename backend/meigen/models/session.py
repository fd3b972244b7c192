"""
Admin session rows backing the `session_token` cookie.

There is a single identity (the admin), so a row carries nothing but the
opaque token and its expiry. Rows are removed on logout, or lazily the
first time an expired token is presented.
"""

from datetime import datetime

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from meigen.database import Base
from meigen.models.types import EpochSeconds, utcnow


class AdminSession(Base):

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    expires_at: Mapped[datetime] = mapped_column(EpochSeconds, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        EpochSeconds, nullable=False, default=utcnow
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def __repr__(self) -> str:
        # never print the token
        return f"<AdminSession(id={self.id}, expires_at='{self.expires_at}')>"
