import base64
import json
from unittest.mock import patch
import uuid

from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from social.models import Block, Follow, Notification
from social.tests.helpers import make_block, make_follow, make_notification, make_user


@override_settings(SOCIAL_CONTENT_STORE="social.content.NullContentStore")
class ApiViewTestCase(TestCase):
    def setUp(self):
        self.user = make_user(username="johndoe")
        self.other = make_user(username="janedoe", first_name="Jane")
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)


class FollowViewTests(ApiViewTestCase):
    def test_follow(self):
        response = self.client.post(reverse("follow", args=[self.other.pk]))
        self.assertEqual(response.status_code, 201)
        self.assertIn("followed_at", response.json())
        self.assertTrue(Follow.objects.filter(follower=self.user, following=self.other).exists())

    def test_follow_twice_conflicts(self):
        make_follow(self.user, self.other)
        response = self.client.post(reverse("follow", args=[self.other.pk]))
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["detail"], "Already following this user.")

    def test_follow_unknown_user(self):
        response = self.client.post(reverse("follow", args=[999999]))
        self.assertEqual(response.status_code, 404)

    def test_follow_self(self):
        response = self.client.post(reverse("follow", args=[self.user.pk]))
        self.assertEqual(response.status_code, 400)

    def test_follow_when_blocked(self):
        make_block(self.other, self.user)
        response = self.client.post(reverse("follow", args=[self.other.pk]))
        self.assertEqual(response.status_code, 403)

    @override_settings(SOCIAL_RATE_LIMITS={"follow": {"limit": 1, "window_ms": 60000}})
    def test_follow_rate_limited(self):
        third = make_user(username="third")
        self.client.post(reverse("follow", args=[self.other.pk]))
        response = self.client.post(reverse("follow", args=[third.pk]))
        self.assertEqual(response.status_code, 429)

    def test_follow_requires_authentication(self):
        response = APIClient().post(reverse("follow", args=[self.other.pk]))
        self.assertEqual(response.status_code, 401)

    def test_unfollow(self):
        make_follow(self.user, self.other)
        response = self.client.delete(reverse("follow", args=[self.other.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True})

    def test_unfollow_not_following(self):
        response = self.client.delete(reverse("follow", args=[self.other.pk]))
        self.assertEqual(response.status_code, 404)

    def test_is_following(self):
        make_follow(self.user, self.other)
        response = self.client.get(reverse("is_following", args=[self.other.pk]))
        self.assertEqual(response.json(), {"is_following": True})

    def test_followers_page(self):
        make_follow(self.user, self.other)
        response = APIClient().get(reverse("followers", args=[self.other.pk]))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["page"][0]["user"]["username"], "johndoe")
        self.assertTrue(body["is_done"])

    def test_following_page_size(self):
        for i in range(3):
            make_follow(self.user, make_user(username=f"fan{i}"), minutes_ago=i)
        response = self.client.get(reverse("following", args=[self.user.pk]), {"page_size": 2})
        body = response.json()
        self.assertEqual(len(body["page"]), 2)
        self.assertFalse(body["is_done"])

        response = self.client.get(
            reverse("following", args=[self.user.pk]),
            {"page_size": 2, "cursor": body["continue_cursor"]},
        )
        self.assertEqual(len(response.json()["page"]), 1)

    def test_followers_with_non_uuid_cursor_id_serves_first_page(self):
        make_follow(self.other, self.user)
        payload = json.dumps({"t": "2024-01-01T00:00:00+00:00", "id": "nope"}).encode()
        cursor = base64.urlsafe_b64encode(payload).decode()
        response = self.client.get(reverse("followers", args=[self.user.pk]), {"cursor": cursor})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()["page"]), 1)

    def test_counts(self):
        make_follow(self.user, self.other)
        response = self.client.get(reverse("follow_counts", args=[self.other.pk]))
        self.assertEqual(response.json(), {"followers": 1, "following": 0, "mutual_follows": 0})

    def test_mutual_and_context(self):
        third = make_user(username="third")
        make_follow(self.user, third)
        make_follow(self.other, third)
        mutual = self.client.get(reverse("mutual_follows", args=[self.other.pk]))
        self.assertEqual([u["username"] for u in mutual.json()], ["third"])

        context = self.client.get(reverse("social_context", args=[self.other.pk]))
        self.assertTrue(context.json()["can_follow"])

    def test_suggestions(self):
        response = self.client.get(reverse("follow_suggestions"))
        self.assertEqual([u["username"] for u in response.json()], ["janedoe"])


class BlockViewTests(ApiViewTestCase):
    def test_block_and_unblock(self):
        response = self.client.post(reverse("block", args=[self.other.pk]))
        self.assertEqual(response.status_code, 201)
        self.assertTrue(Block.objects.filter(blocker=self.user, blocked=self.other).exists())

        response = self.client.delete(reverse("block", args=[self.other.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Block.objects.exists())

    def test_block_twice_conflicts(self):
        make_block(self.user, self.other)
        response = self.client.post(reverse("block", args=[self.other.pk]))
        self.assertEqual(response.status_code, 409)

    def test_blocking_status(self):
        make_block(self.other, self.user)
        response = self.client.get(reverse("blocking_status", args=[self.other.pk]))
        self.assertEqual(
            response.json(),
            {"is_blocked": False, "is_blocked_by": True, "can_interact": False},
        )

    def test_blocked_users(self):
        make_block(self.user, self.other)
        response = self.client.get(reverse("blocked_users"))
        self.assertEqual(response.json()["page"][0]["user"]["username"], "janedoe")


class NotificationViewTests(ApiViewTestCase):
    def test_feed_and_unread_count(self):
        make_notification(self.user, self.other, minutes_ago=1)
        make_notification(self.user, self.other, Notification.TYPE_REACTION, metadata={"reaction_type": "like"})

        feed = self.client.get(reverse("notifications")).json()
        count = self.client.get(reverse("unread_count")).json()

        self.assertEqual([n["type"] for n in feed], ["reaction", "follow"])
        self.assertEqual(feed[0]["from_user"]["username"], "janedoe")
        self.assertEqual(count, {"unread": 2})

    def test_only_unread_and_limit(self):
        make_notification(self.user, self.other, is_read=True)
        make_notification(self.user, self.other)
        make_notification(self.user, self.other)

        unread = self.client.get(reverse("notifications"), {"only_unread": "true"}).json()
        limited = self.client.get(reverse("notifications"), {"limit": "1"}).json()

        self.assertEqual(len(unread), 2)
        self.assertEqual(len(limited), 1)

    def test_mark_read(self):
        notification = make_notification(self.user, self.other)
        response = self.client.post(reverse("mark_notification_read", args=[notification.id]))
        self.assertEqual(response.status_code, 200)
        notification.refresh_from_db()
        self.assertTrue(notification.is_read)

    def test_mark_read_on_other_users_notification(self):
        notification = make_notification(self.other, self.user)
        response = self.client.post(reverse("mark_notification_read", args=[notification.id]))
        self.assertEqual(response.status_code, 404)

    def test_mark_all_read(self):
        make_notification(self.user, self.other)
        make_notification(self.user, self.other)
        response = self.client.post(reverse("mark_all_notifications_read"))
        self.assertEqual(response.json(), {"marked": 2})
        self.assertEqual(self.client.get(reverse("unread_count")).json(), {"unread": 0})

    def test_delete(self):
        notification = make_notification(self.user, self.other)
        response = self.client.delete(reverse("delete_notification", args=[notification.id]))
        self.assertEqual(response.status_code, 204)
        response = self.client.delete(reverse("delete_notification", args=[uuid.uuid4()]))
        self.assertEqual(response.status_code, 404)

    def test_feed_requires_authentication(self):
        response = APIClient().get(reverse("notifications"))
        self.assertEqual(response.status_code, 401)


class TokenAuthenticationViewTests(TestCase):
    @patch("social.authentication.verify_identity_token")
    def test_bearer_token_authenticates_caller(self, mock_verify):
        user = make_user(username="johndoe")
        other = make_user(username="janedoe")
        mock_verify.return_value = "uid-johndoe"

        response = APIClient().post(
            reverse("follow", args=[other.pk]),
            HTTP_AUTHORIZATION="Bearer some-token",
        )

        self.assertEqual(response.status_code, 201)
        self.assertTrue(Follow.objects.filter(follower=user, following=other).exists())

    @patch("social.authentication.verify_identity_token")
    def test_bad_token_is_rejected(self, mock_verify):
        mock_verify.side_effect = ValueError("expired")
        response = APIClient().get(reverse("notifications"), HTTP_AUTHORIZATION="Bearer bad")
        self.assertEqual(response.status_code, 401)
