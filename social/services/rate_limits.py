"""Sliding-window rate limiting persisted in the database.

Each accepted request is one ``RateWindowEntry`` row. A check counts the rows
for a key inside the trailing window and records a new row only when the caller
is still under the limit.

The count-then-insert runs in one transaction but takes no row locks, so two
requests racing on the same key can both be admitted. That is acceptable for
abuse protection; this is not a hard quota.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from social.errors import RateLimited
from social.models import RateWindowEntry

logger = logging.getLogger(__name__)

EVICTION_BATCH = 100
SWEEP_BATCH = 1000
DEFAULT_SWEEP_AGE_MS = 24 * 60 * 60 * 1000


def _age_ms(now, timestamp):
    return int((now - timestamp) / timedelta(milliseconds=1))


class RateLimiter:
    """Check-and-record limiter keyed by arbitrary strings like ``follow:<uid>``."""

    def __init__(self, entry_model=RateWindowEntry, clock=timezone.now):
        self.entry_model = entry_model
        self.clock = clock

    def _evict_expired(self, key, window_start):
        stale_ids = list(
            self.entry_model.objects.filter(key=key, timestamp__lt=window_start)
            .order_by("timestamp")
            .values_list("id", flat=True)[:EVICTION_BATCH]
        )
        if stale_ids:
            self.entry_model.objects.filter(id__in=stale_ids).delete()

    def check_and_record(self, key, limit, window_ms):
        """Return True and record the request if ``key`` is under ``limit`` in the window."""
        now = self.clock()
        window_start = now - timedelta(milliseconds=window_ms)
        with transaction.atomic():
            self._evict_expired(key, window_start)
            current = self.entry_model.objects.filter(key=key, timestamp__gte=window_start).count()
            if current >= limit:
                logger.info("Rate limit hit for %s (%s/%s in %sms)", key, current, limit, window_ms)
                return False
            self.entry_model.objects.create(key=key, timestamp=now)
        return True

    def enforce(self, key, limit, window_ms):
        """Like check_and_record, but raise RateLimited on denial."""
        if not self.check_and_record(key, limit, window_ms):
            raise RateLimited()

    def enforce_action(self, action, caller_key):
        """Apply the SOCIAL_RATE_LIMITS entry for ``action``; unknown actions are unlimited."""
        rule = getattr(settings, "SOCIAL_RATE_LIMITS", {}).get(action)
        if not rule:
            return
        self.enforce(f"{action}:{caller_key}", rule["limit"], rule["window_ms"])

    def status(self, key, window_ms):
        """Diagnostic view of the window for ``key``; never writes."""
        now = self.clock()
        window_start = now - timedelta(milliseconds=window_ms)
        timestamps = list(
            self.entry_model.objects.filter(key=key, timestamp__gte=window_start)
            .order_by("timestamp")
            .values_list("timestamp", flat=True)
        )
        return {
            "request_count": len(timestamps),
            "window_start": window_start,
            "window_end": now,
            "requests": [{"timestamp": ts, "age_ms": _age_ms(now, ts)} for ts in timestamps],
        }

    def cleanup_old_entries(self, older_than_ms=None):
        """Global sweep of entries older than ``older_than_ms`` (default 24h), one batch per call."""
        cutoff = self.clock() - timedelta(milliseconds=older_than_ms or DEFAULT_SWEEP_AGE_MS)
        stale_ids = list(
            self.entry_model.objects.filter(timestamp__lt=cutoff)
            .order_by("timestamp")
            .values_list("id", flat=True)[:SWEEP_BATCH]
        )
        deleted = 0
        if stale_ids:
            deleted, _ = self.entry_model.objects.filter(id__in=stale_ids).delete()
        logger.info("Rate limit sweep removed %s entries older than %s", deleted, cutoff.isoformat())
        return {"deleted": deleted, "cutoff": cutoff}
