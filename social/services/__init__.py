from .rate_limits import RateLimiter
from .notifications import NotificationService
from .social_queries import SocialQueryService
from .relationships import RelationshipService

__all__ = [
    "RateLimiter",
    "NotificationService",
    "SocialQueryService",
    "RelationshipService",
]
