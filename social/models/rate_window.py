"""Model for sliding-window rate limit bookkeeping."""

from django.db import models


class RateWindowEntry(models.Model):
    """One accepted request for a rate-limit key. Many rows per key are expected."""
    key = models.CharField(max_length=255)
    timestamp = models.DateTimeField()

    class Meta:
        """Index shapes used by the limiter and the global sweep."""
        db_table = "rate_window_entries"
        indexes = [
            models.Index(fields=["key", "timestamp"], name="idx_rate_key_timestamp"),
            models.Index(fields=["timestamp"], name="idx_rate_timestamp"),
        ]

    def __str__(self):
        return f"RateWindowEntry(key={self.key}, timestamp={self.timestamp.isoformat()})"
