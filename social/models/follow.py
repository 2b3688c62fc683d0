"""Model representing follower→following relationships."""

from __future__ import annotations
import uuid
from django.conf import settings
from django.db import models
from django.db.models import Q, F
from django.utils import timezone


def _uuid7_or_4() -> uuid.UUID:
    """Return uuid7 when available, else uuid4 (for primary keys)."""
    return getattr(uuid, "uuid7", uuid.uuid4)()


class ImmutableEdgeMixin:
    """Edges are created and deleted, never updated in place."""

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError(f"{type(self).__name__} edges are immutable; delete and recreate instead")
        super().save(*args, **kwargs)


class Follow(ImmutableEdgeMixin, models.Model):
    """Directed edge where follower subscribes to following."""
    id = models.UUIDField(primary_key=True, default=_uuid7_or_4, editable=False)

    follower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="following_edges",  # user.following_edges -> edges this user created (outbound)
        db_column="follower_id",
    )
    following = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="follower_edges",   # user.follower_edges -> edges pointing at this user (inbound)
        db_column="following_id",
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        """DB metadata and constraints for follow relationships."""
        db_table = "follows"
        constraints = [
            models.UniqueConstraint(fields=["follower", "following"], name="uniq_follows_follower_following"),
            models.CheckConstraint(condition=~Q(follower=F("following")), name="chk_follows_not_self"),
        ]
        indexes = [
            models.Index(fields=["follower", "created_at"], name="idx_follows_follower_created"),
            models.Index(fields=["following", "created_at"], name="idx_follows_following_created"),
        ]

    def __str__(self) -> str:
        """Readable representation for admin/debugging."""
        return f"Follow(follower={self.follower_id}, following={self.following_id})"
