from datetime import timedelta
import uuid

from django.utils import timezone

from social.models import Block, Follow, Notification, User


def make_user(**kwargs):
    username = kwargs.pop("username", "johndoe")
    email = kwargs.pop(
        "email",
        f"{username.lstrip('@')}_{uuid.uuid4().hex[:6]}@example.org"
    )
    password = kwargs.pop("password", "Password123")

    user = User.objects.create_user(
        username=username,
        email=email,
        password=password,
        first_name=kwargs.pop("first_name", "John"),
        last_name=kwargs.pop("last_name", "Doe"),
        bio=kwargs.pop("bio", "Test bio"),
        external_id=kwargs.pop("external_id", f"uid-{username.lstrip('@')}"),
        **kwargs,
    )
    return user


def make_follow(follower, following, *, minutes_ago=0):
    return Follow.objects.create(
        follower=follower,
        following=following,
        created_at=timezone.now() - timedelta(minutes=minutes_ago),
    )


def make_block(blocker, blocked):
    return Block.objects.create(blocker=blocker, blocked=blocked)


def make_notification(recipient, sender, notification_type=Notification.TYPE_FOLLOW, *, minutes_ago=0, **extra):
    return Notification.objects.create(
        recipient=recipient,
        sender=sender,
        notification_type=notification_type,
        created_at=timezone.now() - timedelta(minutes=minutes_ago),
        **extra,
    )


class FakeClock:
    """Callable clock for services that take ``clock=``; advance it explicitly."""

    def __init__(self, start=None):
        self.now = start or timezone.now()

    def __call__(self):
        return self.now

    def advance(self, **delta):
        self.now = self.now + timedelta(**delta)
