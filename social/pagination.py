"""Keyset pagination over ``(created_at, id)`` ordered querysets.

Cursors point just past the last row served, so rows inserted at the head of
the list after a cursor was issued never shift the pages that follow it.
"""

import base64
import json
import uuid
from dataclasses import dataclass, field
from typing import Any, List, Optional

from django.db.models import Q
from django.utils.dateparse import parse_datetime

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass
class Page:
    """One page of results plus the cursor to continue from."""
    page: List[Any] = field(default_factory=list)
    continue_cursor: Optional[str] = None
    is_done: bool = True


def clamp(value, *, default, low, high):
    """Coerce a caller-supplied size into ``[low, high]``; junk becomes ``default``."""
    try:
        value = int(value) if value is not None else default
    except (TypeError, ValueError):
        value = default
    return min(max(value, low), high)


def encode_cursor(obj) -> str:
    payload = json.dumps({"t": obj.created_at.isoformat(), "id": str(obj.pk)})
    return base64.urlsafe_b64encode(payload.encode()).decode()


def decode_cursor(cursor):
    """Return ``(created_at, id)`` or None for an empty/garbled cursor."""
    if not cursor:
        return None
    try:
        data = json.loads(base64.urlsafe_b64decode(cursor.encode()).decode())
        created_at = parse_datetime(data["t"])
        pk = uuid.UUID(str(data["id"]))
    except (ValueError, KeyError, TypeError, AttributeError):
        return None
    if created_at is None:
        return None
    return created_at, pk


def paginate(queryset, *, page_size=None, cursor=None):
    """Return a Page of model instances, newest first."""
    size = clamp(page_size, default=DEFAULT_PAGE_SIZE, low=1, high=MAX_PAGE_SIZE)
    qs = queryset.order_by("-created_at", "-id")
    position = decode_cursor(cursor)
    if position:
        created_at, pk = position
        qs = qs.filter(Q(created_at__lt=created_at) | Q(created_at=created_at, id__lt=pk))
    rows = list(qs[: size + 1])
    has_more = len(rows) > size
    rows = rows[:size]
    next_cursor = encode_cursor(rows[-1]) if rows else cursor
    return Page(page=rows, continue_cursor=next_cursor, is_done=not has_more)
