from typing import Any, List, Mapping, Optional, Sequence, Type
from django.db.models import Model, QuerySet


class DB_Accessor:
    """Generic data accessor to wrap basic queryset operations."""

    def __init__(self, model: Type[Model]) -> None:
        self.model = model

    def filter(self, *conditions: Any, **lookup: Any) -> QuerySet:
        return self.model.objects.filter(*conditions, **lookup)

    def list(
        self,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Sequence[str] = (),
        limit: Optional[int] = None,
    ) -> List[Model]:
        """Return a filtered, ordered and optionally truncated list."""
        qs: QuerySet = self.filter(**(filters or {}))
        if order_by:
            qs = qs.order_by(*order_by)
        if limit is not None:
            qs = qs[: max(0, int(limit))]
        return list(qs)

    def get_or_none(self, **lookup: Any) -> Optional[Model]:
        """Fetch a single object matching the lookup, or None."""
        return self.filter(**lookup).first()

    def exists(self, **lookup: Any) -> bool:
        return self.filter(**lookup).exists()

    def count(self, **lookup: Any) -> int:
        return self.filter(**lookup).count()

    def create(self, **data: Any) -> Model:
        """Create and return a new object."""
        return self.model.objects.create(**data)

    def delete(self, **lookup: Any) -> int:
        """Delete objects matching lookup; return count deleted."""
        count, _ = self.filter(**lookup).delete()
        return count
