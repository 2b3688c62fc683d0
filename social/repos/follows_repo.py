"""Repository helpers for follow edges."""

from typing import List, Set

from social.db_accessor import DB_Accessor
from social.models.follow import Follow


class FollowsRepo(DB_Accessor):
    """Repository wrapper for follow relationships."""
    def __init__(self) -> None:
        """Initialise with the Follow model."""
        super().__init__(Follow)

    def is_following(self, *, follower_id, following_id) -> bool:
        """Return True if follower_id follows following_id."""
        return self.exists(follower_id=follower_id, following_id=following_id)

    def follower_count(self, user_id) -> int:
        return self.count(following_id=user_id)

    def following_count(self, user_id) -> int:
        return self.count(follower_id=user_id)

    def following_ids(self, user_id) -> Set:
        """Return ids of every user that user_id follows."""
        return set(self.filter(follower_id=user_id).values_list("following_id", flat=True))

    def recent_following_ids(self, user_id, limit: int) -> List:
        """Return up to limit followed ids, newest edge first."""
        return list(
            self.filter(follower_id=user_id)
            .order_by("-created_at", "-id")
            .values_list("following_id", flat=True)[:limit]
        )

    def followers_of(self, user_id):
        return self.filter(following_id=user_id).select_related("follower")

    def following_of(self, user_id):
        return self.filter(follower_id=user_id).select_related("following")
