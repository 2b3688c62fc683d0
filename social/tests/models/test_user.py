from django.db import IntegrityError, transaction
from django.test import TestCase

from social.tests.helpers import make_user


class UserModelTestCase(TestCase):
    def setUp(self):
        self.user = make_user(username="johndoe", first_name="John", last_name="Doe")

    def test_external_id_is_unique(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                make_user(username="another", external_id=self.user.external_id)

    def test_many_users_may_lack_an_external_id(self):
        make_user(username="first", external_id=None)
        make_user(username="second", external_id=None)

    def test_display_name_prefers_full_name(self):
        self.assertEqual(self.user.display_name(), "John Doe")

    def test_display_name_falls_back_to_username(self):
        self.user.first_name = ""
        self.user.last_name = ""
        self.assertEqual(self.user.display_name(), "johndoe")

    def test_avatar_url_uses_gravatar_without_profile_image(self):
        self.assertIn("gravatar.com", self.user.avatar_url)

    def test_avatar_url_prefers_profile_image(self):
        self.user.profile_image = "https://cdn.example.org/me.png"
        self.assertEqual(self.user.avatar_url, "https://cdn.example.org/me.png")
