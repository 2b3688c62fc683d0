from datetime import timedelta
from io import StringIO

from django.core.management import call_command
from django.db.models import F
from django.test import TestCase, override_settings
from django.utils import timezone

from social.models import Block, Follow, Notification, RateWindowEntry, User
from social.tests.helpers import make_follow, make_notification, make_user


class CleanupCommandTests(TestCase):
    def setUp(self):
        self.recipient = make_user(username="recipient")
        self.sender = make_user(username="sender")

    def test_cleanup_notifications(self):
        old = make_notification(self.recipient, self.sender)
        Notification.objects.filter(id=old.id).update(created_at=timezone.now() - timedelta(days=10))
        make_notification(self.recipient, self.sender)
        out = StringIO()

        call_command("cleanup_notifications", "--days", "7", stdout=out)

        self.assertEqual(Notification.objects.count(), 1)
        self.assertIn("Deleted 1 notifications", out.getvalue())

    def test_cleanup_rate_limits(self):
        RateWindowEntry.objects.create(key="follow:a", timestamp=timezone.now() - timedelta(days=2))
        RateWindowEntry.objects.create(key="follow:a", timestamp=timezone.now())
        out = StringIO()

        call_command("cleanup_rate_limits", stdout=out)

        self.assertEqual(RateWindowEntry.objects.count(), 1)
        self.assertIn("Deleted 1 rate limit entries", out.getvalue())


@override_settings(SOCIAL_CONTENT_STORE="social.content.NullContentStore")
class SeedCommandTests(TestCase):
    def test_seed_builds_a_social_graph(self):
        call_command("seed", "--users", "8", "--follows", "2", stdout=StringIO())

        self.assertEqual(User.objects.count(), 8)
        self.assertEqual(Follow.objects.count(), 16)
        self.assertFalse(Follow.objects.filter(follower_id=F("following_id")).exists())
        self.assertTrue(Notification.objects.filter(notification_type=Notification.TYPE_FOLLOW).exists())

    def test_unseed_keeps_staff(self):
        staff = make_user(username="admin", is_staff=True)
        regular = make_user(username="regular")
        make_follow(regular, staff)
        RateWindowEntry.objects.create(key="follow:x", timestamp=timezone.now())

        call_command("unseed", stdout=StringIO())

        self.assertEqual(list(User.objects.all()), [staff])
        self.assertFalse(Follow.objects.exists())
        self.assertFalse(Block.objects.exists())
        self.assertFalse(RateWindowEntry.objects.exists())
