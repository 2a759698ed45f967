"""SQLAlchemy model for the users_groups junction table."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from authority.infrastructure.persistence.database import Base


class UsersGroupsModel(Base):
    """Junction table for many-to-many relationship between users and groups."""

    __tablename__ = "users_groups"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    group_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("groups.id", ondelete="CASCADE"),
        primary_key=True,
    )

    def __repr__(self) -> str:
        return f"<UsersGroups(user_id={self.user_id}, group_id={self.group_id})>"
