"""Group entity for organizing users.

Users can belong to multiple groups (many-to-many relationship). Groups are
referenced by users, never owned by them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Group:
    """Group entity.

    Attributes:
        id: Unique identifier (UUID string).
        name: Group name (unique).
        description: Optional description of the group's purpose.
    """

    id: str
    name: str
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate group data after initialization."""
        if not self.id:
            raise ValueError("Group ID is required")
        if not self.name:
            raise ValueError("Group name is required")
