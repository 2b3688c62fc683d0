"""Map external identity-provider subjects onto internal users."""

from django.contrib.auth import get_user_model

from social.errors import Unauthenticated

User = get_user_model()


class IdentityResolver:
    """Resolve an external identity string to the single matching user."""

    def __init__(self, user_model=None):
        self.user_model = user_model or User

    def resolve(self, identity):
        """Return the user for ``identity`` or None."""
        if not identity:
            return None
        return self.user_model.objects.filter(external_id=identity, is_active=True).first()


def is_resolved(caller):
    return bool(caller) and getattr(caller, "is_authenticated", False)


def require_caller(caller):
    """Return the caller or raise Unauthenticated for anonymous/unresolved callers."""
    if not is_resolved(caller):
        raise Unauthenticated()
    return caller


def identity_key(caller):
    """Stable per-caller key for rate limiting; prefers the external identity."""
    return caller.external_id or str(caller.pk)
