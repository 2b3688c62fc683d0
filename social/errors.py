"""Typed failures raised by the social core.

Each error is a DRF ``APIException`` so the API layer renders it with the right
status code without any extra mapping; services raise them directly.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class SocialError(APIException):
    """Base class for every failure reported to the immediate caller."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Social request failed."
    default_code = "social_error"


class Unauthenticated(SocialError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated."
    default_code = "auth_error"


class NotFound(SocialError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class SelfReference(SocialError):
    default_detail = "A user cannot target themselves."
    default_code = "self_reference"


class AlreadyExists(SocialError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Relationship already exists."
    default_code = "duplicate_resource"


class Forbidden(SocialError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You cannot interact with this user."
    default_code = "forbidden"


class RateLimited(SocialError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = "Rate limit exceeded."
    default_code = "rate_limited"


class InvalidMetadata(SocialError):
    default_detail = "Invalid notification metadata."
    default_code = "validation_error"
