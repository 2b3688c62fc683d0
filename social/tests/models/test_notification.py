from django.test import TestCase

from social.models.notification import Notification
from social.tests.helpers import make_notification, make_user


class NotificationModelTestCase(TestCase):
    def setUp(self):
        self.recipient = make_user(username="recipient")
        self.sender = make_user(username="sender")

    def test_defaults_to_unread(self):
        notification = make_notification(self.recipient, self.sender)
        self.assertFalse(notification.is_read)
        self.assertIsNone(notification.target_type)
        self.assertIsNone(notification.metadata)

    def test_metadata_round_trips_json(self):
        notification = make_notification(
            self.recipient,
            self.sender,
            Notification.TYPE_REACTION,
            target_type=Notification.TARGET_LOG,
            target_id="log-1",
            metadata={"reaction_type": "love", "extra": [1, 2]},
        )
        notification.refresh_from_db()
        self.assertEqual(notification.metadata["reaction_type"], "love")
        self.assertEqual(notification.metadata["extra"], [1, 2])

    def test_visible_to_hides_deleted_and_inactive_senders(self):
        keep = make_notification(self.recipient, self.sender)
        ghost = make_user(username="ghost")
        make_notification(self.recipient, ghost)
        ghost.delete()
        dormant = make_user(username="dormant", is_active=False)
        make_notification(self.recipient, dormant)

        visible = list(Notification.objects.visible_to(self.recipient))

        self.assertEqual(visible, [keep])
        self.assertEqual(Notification.objects.filter(recipient=self.recipient).count(), 3)

    def test_newest_first_orders_by_created_at(self):
        older = make_notification(self.recipient, self.sender, minutes_ago=10)
        newer = make_notification(self.recipient, self.sender, minutes_ago=1)
        self.assertEqual(list(Notification.objects.newest_first()), [newer, older])

    def test_unread_filter(self):
        make_notification(self.recipient, self.sender, is_read=True)
        unread = make_notification(self.recipient, self.sender)
        self.assertEqual(list(Notification.objects.unread()), [unread])

    def test_deleting_recipient_cascades(self):
        make_notification(self.recipient, self.sender)
        self.recipient.delete()
        self.assertFalse(Notification.objects.exists())

    def test_string_representation(self):
        notification = make_notification(self.recipient, self.sender)
        self.assertIn("follow", str(notification))
