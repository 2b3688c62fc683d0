"""Repository helpers for block edges."""

from typing import Set

from django.db.models import Q

from social.db_accessor import DB_Accessor
from social.models.block import Block


class BlocksRepo(DB_Accessor):
    """Repository wrapper for block relationships."""
    def __init__(self) -> None:
        """Initialise with the Block model."""
        super().__init__(Block)

    def has_blocked(self, *, blocker_id, blocked_id) -> bool:
        """Return True if blocker_id has blocked blocked_id."""
        return self.exists(blocker_id=blocker_id, blocked_id=blocked_id)

    def blocked_ids(self, user_id) -> Set:
        """Ids this user has blocked."""
        return set(self.filter(blocker_id=user_id).values_list("blocked_id", flat=True))

    def blocker_ids(self, user_id) -> Set:
        """Ids of users who have blocked this user."""
        return set(self.filter(blocked_id=user_id).values_list("blocker_id", flat=True))

    def related_ids(self, user_id) -> Set:
        """Ids with a block in either direction."""
        return self.blocked_ids(user_id) | self.blocker_ids(user_id)

    def between(self, user_a_id, user_b_id) -> bool:
        return self.filter(
            Q(blocker_id=user_a_id, blocked_id=user_b_id) | Q(blocker_id=user_b_id, blocked_id=user_a_id)
        ).exists()

    def blocks_by(self, user_id):
        return self.filter(blocker_id=user_id).select_related("blocked")
