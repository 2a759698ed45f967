"""SQLAlchemy model for the throttle table.

One row per user, written on the first failed login, suspension or ban.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from authority.infrastructure.persistence.database import Base


class ThrottleModel(Base):
    """SQLAlchemy model for the throttle table.

    Attributes:
        user_id: Primary key and foreign key to users table.
        failed_attempts: Consecutive failed login attempts.
        last_attempt_at: Time of the last failed attempt.
        suspended_until: End of the current suspension.
        banned_at: Time of the ban, never cleared.
    """

    __tablename__ = "throttle"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    failed_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_attempt_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    suspended_until: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    banned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Throttle(user_id={self.user_id}, failed_attempts={self.failed_attempts})>"
