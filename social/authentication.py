from rest_framework import authentication
from rest_framework import exceptions

from .firebase_admin_client import verify_identity_token
from .identity import IdentityResolver


class FirebaseAuthentication(authentication.BaseAuthentication):
    """DRF authentication backend validating Firebase ID tokens."""

    keyword = "Bearer"

    def __init__(self, resolver=None):
        self.resolver = resolver or IdentityResolver()

    def authenticate(self, request):
        """Validate Authorization header token and return (user, uid)."""
        auth_header = request.META.get('HTTP_AUTHORIZATION')
        if not auth_header:
            return None

        id_token = auth_header.split(' ').pop()

        try:
            uid = verify_identity_token(id_token)
        except Exception:
            raise exceptions.AuthenticationFailed('Invalid Firebase token')

        user = self.resolver.resolve(uid)
        if user is None:
            raise exceptions.AuthenticationFailed('User not found')
        return (user, uid)

    def authenticate_header(self, request):
        return self.keyword
