"""Repository helpers for user lookups."""

from typing import List, Optional

from social.db_accessor import DB_Accessor
from social.models.user import User


class UserRepo(DB_Accessor):
    """Repository for basic user queries."""
    def __init__(self) -> None:
        """Initialise with the User model."""
        super().__init__(User)

    def get_by_id(self, user_id) -> Optional[User]:
        """Return an active user by id, or None."""
        return self.get_or_none(id=user_id, is_active=True)

    def get_by_external_id(self, external_id: str) -> Optional[User]:
        """Return the user linked to an identity-provider subject."""
        return self.get_or_none(external_id=external_id)

    def recent(self, limit: int) -> List[User]:
        """Return the most recently joined active users."""
        return self.list(filters={"is_active": True}, order_by=("-date_joined", "-id"), limit=limit)

    def in_bulk(self, user_ids) -> dict:
        """Return {id: user} for the active users among user_ids."""
        return self.model.objects.filter(is_active=True).in_bulk(list(user_ids))
