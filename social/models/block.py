"""Model that records one user blocking another."""

from django.conf import settings
from django.db import models
from django.db.models import Q, F
from django.utils import timezone

from .follow import ImmutableEdgeMixin, _uuid7_or_4


class Block(ImmutableEdgeMixin, models.Model):
    """Directed edge: blocker no longer accepts follows or notifications from blocked."""
    id = models.UUIDField(primary_key=True, default=_uuid7_or_4, editable=False)
    blocker = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blocks_made",
    )
    blocked = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blocks_received",
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        """Constraints and table name for Block."""
        db_table = "blocks"
        constraints = [
            models.UniqueConstraint(
                fields=["blocker", "blocked"], name="uniq_blocks_blocker_blocked"
            ),
            models.CheckConstraint(
                condition=~Q(blocker=F("blocked")), name="chk_blocks_not_self"
            ),
        ]
        indexes = [
            models.Index(fields=["blocker", "created_at"], name="idx_blocks_blocker_created"),
            models.Index(fields=["blocked"], name="idx_blocks_blocked"),
        ]

    def __str__(self):
        """Readable identifier for a block edge."""
        return f"Block(blocker={self.blocker_id}, blocked={self.blocked_id})"
