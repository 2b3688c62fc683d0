from django.db import models
from django.conf import settings
from django.utils import timezone

from .follow import _uuid7_or_4

"""
Notification model

This table stores in-app notifications for users (the "bell" / activity feed).

Core fields:
- `recipient`: who receives the notification (the user being notified)
- `sender`: who triggered the notification (the user who did the action)
- `notification_type`: what kind of event it is (follow/reaction/comment/reply/quote)

Optional links (only filled when relevant):
- `target_type` + `target_id`: the log, forum thread or forum reply involved.
  These live in the content store, so they are opaque strings rather than FKs.
- `content`: short preview text
- `metadata`: per-type payload (reaction type, quoted text, ...), see
  `social.serializers.validate_metadata`

State + ordering:
- `is_read`: flips False -> True once, never back
- `created_at`: when it happened, newest first

Notes:
- `sender` is SET_NULL on user deletion. Orphaned rows stay until the retention
  sweep but are hidden from feeds and unread counts by `visible_to()`, so both
  always agree.
"""


class NotificationQuerySet(models.QuerySet):
    def visible_to(self, user):
        """Rows the recipient can see: their own, from a sender that still exists."""
        return self.filter(recipient=user, sender__isnull=False, sender__is_active=True)

    def unread(self):
        return self.filter(is_read=False)

    def newest_first(self):
        return self.order_by("-created_at", "-id")


class Notification(models.Model):
    TYPE_FOLLOW = "follow"
    TYPE_REACTION = "reaction"
    TYPE_COMMENT = "comment"
    TYPE_REPLY = "reply"
    TYPE_QUOTE = "quote"

    TYPES = [
        (TYPE_FOLLOW, 'Follow'),
        (TYPE_REACTION, 'Reaction'),
        (TYPE_COMMENT, 'Comment'),
        (TYPE_REPLY, 'Reply'),
        (TYPE_QUOTE, 'Quote'),
    ]

    TARGET_LOG = "log"
    TARGET_THREAD = "thread"
    TARGET_REPLY = "reply"

    TARGET_TYPES = [
        (TARGET_LOG, 'Log'),
        (TARGET_THREAD, 'Forum thread'),
        (TARGET_REPLY, 'Forum reply'),
    ]

    id = models.UUIDField(primary_key=True, default=_uuid7_or_4, editable=False)
    recipient = models.ForeignKey(settings.AUTH_USER_MODEL, related_name='notifications', on_delete=models.CASCADE)
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='sent_notifications',
        null=True,
        on_delete=models.SET_NULL,
    )
    notification_type = models.CharField(max_length=20, choices=TYPES)
    target_type = models.CharField(max_length=20, choices=TARGET_TYPES, null=True, blank=True)
    target_id = models.CharField(max_length=64, null=True, blank=True)
    content = models.CharField(max_length=200, null=True, blank=True)
    metadata = models.JSONField(null=True, blank=True)

    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        db_table = "notifications"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="idx_notif_recipient_unread"),
            models.Index(fields=["recipient", "created_at"], name="idx_notif_recipient_created"),
            models.Index(fields=["created_at"], name="idx_notif_created"),
        ]

    def __str__(self):
        return f"Notification for {self.recipient_id}: {self.notification_type}"
