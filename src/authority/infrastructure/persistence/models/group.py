"""SQLAlchemy model for the groups table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from authority.infrastructure.persistence.database import Base


class GroupModel(Base):
    """SQLAlchemy model for the groups table.

    Attributes:
        id: Primary key (UUID string).
        name: Group name (unique).
        description: Optional description.
    """

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Group ID (UUID)",
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Group name",
    )
    description: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Description of the group's purpose",
    )

    users: Mapped[list["UserModel"]] = relationship(  # noqa: F821
        "UserModel",
        secondary="users_groups",
        back_populates="groups",
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name})>"
