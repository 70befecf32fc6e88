"""SQLAlchemy model for the admin password reset flag."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from mangle_identity.domain.shared.time import utc_now
from mangle_identity.infrastructure.persistence.sqlalchemy.base import Base

ADMIN_RESET_STATUS_ID = "admin"


class ResetStatusModel(Base):
    """One row per gate; only the ``admin`` row is used."""

    __tablename__ = "password_reset_status"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    needs_reset: Mapped[bool] = mapped_column(Boolean, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    def __repr__(self) -> str:
        return f"<ResetStatusModel(id={self.id}, needs_reset={self.needs_reset})>"
