from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from social.errors import Unauthenticated
from social.identity import IdentityResolver, identity_key, is_resolved, require_caller
from social.tests.helpers import make_user


class IdentityResolverTestCase(TestCase):
    def setUp(self):
        self.user = make_user(username="johndoe")
        self.resolver = IdentityResolver()

    def test_resolves_known_identity(self):
        self.assertEqual(self.resolver.resolve("uid-johndoe"), self.user)

    def test_unknown_or_empty_identity(self):
        self.assertIsNone(self.resolver.resolve("uid-nobody"))
        self.assertIsNone(self.resolver.resolve(""))
        self.assertIsNone(self.resolver.resolve(None))

    def test_inactive_user_is_not_resolved(self):
        self.user.is_active = False
        self.user.save()
        self.assertIsNone(self.resolver.resolve("uid-johndoe"))

    def test_require_caller(self):
        self.assertEqual(require_caller(self.user), self.user)
        with self.assertRaises(Unauthenticated):
            require_caller(None)
        with self.assertRaises(Unauthenticated):
            require_caller(AnonymousUser())

    def test_is_resolved(self):
        self.assertTrue(is_resolved(self.user))
        self.assertFalse(is_resolved(AnonymousUser()))

    def test_identity_key_prefers_external_id(self):
        self.assertEqual(identity_key(self.user), "uid-johndoe")
        legacy = make_user(username="legacy", external_id=None)
        self.assertEqual(identity_key(legacy), str(legacy.pk))
