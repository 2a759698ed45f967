"""Group membership synchronization.

Computes how a user's group set changes when a profile update supplies the
desired memberships. Every known group is evaluated, not only the ones
mentioned in the request.
"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class MembershipChange:
    """Result of a membership diff.

    Attributes:
        added: Groups the user joins.
        removed: Groups the user leaves.
        resulting: The user's complete group set after the change.
    """

    added: frozenset[str]
    removed: frozenset[str]
    resulting: frozenset[str]

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


def diff_group_membership(
    current_group_ids: Iterable[str],
    desired_group_ids: Iterable[str],
    all_group_ids: Iterable[str],
) -> MembershipChange:
    """Decide membership for each known group.

    Desired ids that name no known group are ignored. Current ids that name
    no known group (deleted groups) are dropped from the result and reported
    as removed.

    Args:
        current_group_ids: Groups the user belongs to now.
        desired_group_ids: Groups the user should belong to.
        all_group_ids: Every group known to the store.

    Returns:
        MembershipChange describing additions, removals and the final set.
    """
    current = frozenset(current_group_ids)
    desired = frozenset(desired_group_ids)

    resulting: set[str] = set()
    for group_id in all_group_ids:
        if group_id in desired:
            resulting.add(group_id)

    final = frozenset(resulting)
    return MembershipChange(
        added=final - current,
        removed=current - final,
        resulting=final,
    )
