"""Notification fan-out, feed and read-state engine.

Records are only ever written here. A notification is suppressed at write time
when the recipient is the sender or has blocked the sender, so blocked users
never produce a row at all.

Feeds and unread counts are both built on ``Notification.objects.visible_to``;
the unread count therefore always equals the length of an unlimited unread feed.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from social.content import get_content_store
from social.errors import InvalidMetadata, NotFound
from social.identity import is_resolved, require_caller
from social.models import Notification
from social.repos.blocks_repo import BlocksRepo
from social.serializers import NotificationSerializer, PublicUserSerializer, validate_metadata

logger = logging.getLogger(__name__)

CONTENT_LIMIT = 200
PREVIEW_LIMIT = 50
DEFAULT_FEED_LIMIT = 20
CLEANUP_BATCH = 100
CLEANUP_MAX_BATCHES = 10


def _truncate(text, limit, suffix="..."):
    if not text or len(text) <= limit:
        return text
    return text[: limit - len(suffix)] + suffix


def _preview(text):
    if text and len(text) > PREVIEW_LIMIT:
        return text[:PREVIEW_LIMIT] + "..."
    return text


def preview_text(notification, from_name=None):
    """One-line human-readable summary of a notification."""
    name = from_name or (notification.sender.username if notification.sender else "Someone")
    metadata = notification.metadata or {}
    kind = notification.notification_type
    if kind == Notification.TYPE_FOLLOW:
        return f"{name} started following you"
    if kind == Notification.TYPE_REACTION:
        return f"{name} {metadata.get('reaction_type') or 'reacted'} to your post"
    if kind == Notification.TYPE_COMMENT:
        verb = "mentioned you" if metadata.get("mention") else "commented"
        return f"{name} {verb}: {notification.content or '...'}"
    if kind == Notification.TYPE_REPLY:
        return f"{name} replied to your thread"
    if kind == Notification.TYPE_QUOTE:
        return f"{name} quoted your reply"
    return f"{name} interacted with your content"


class NotificationService:
    """Create, read, mark and sweep notification records."""

    DEDUPE_WINDOW = timedelta(minutes=5)

    def __init__(self, notification_model=Notification, blocks_repo=None, content_store=None, clock=timezone.now):
        self.notification_model = notification_model
        self.blocks = blocks_repo or BlocksRepo()
        self._content_store = content_store
        self.clock = clock

    @property
    def content_store(self):
        if self._content_store is None:
            self._content_store = get_content_store()
        return self._content_store

    # -- writes ---------------------------------------------------------

    def _is_recent_duplicate(self, recipient, sender, notification_type, target_id):
        threshold = self.clock() - self.DEDUPE_WINDOW
        return self.notification_model.objects.filter(
            recipient=recipient,
            sender=sender,
            notification_type=notification_type,
            target_id=target_id,
            created_at__gt=threshold,
        ).exists()

    def create_notification(
        self,
        recipient,
        sender,
        notification_type,
        *,
        target_type=None,
        target_id=None,
        content=None,
        metadata=None,
    ):
        """Insert an unread notification, or return None when it must be suppressed."""
        if recipient is None or sender is None or recipient.pk == sender.pk:
            return None
        if notification_type not in dict(Notification.TYPES):
            raise InvalidMetadata(f"Unknown notification type '{notification_type}'.")
        if target_type is not None and target_type not in dict(Notification.TARGET_TYPES):
            raise InvalidMetadata(f"Unknown target type '{target_type}'.")
        metadata = validate_metadata(notification_type, metadata)
        target_id = str(target_id) if target_id else None

        with transaction.atomic():
            if self.blocks.has_blocked(blocker_id=recipient.pk, blocked_id=sender.pk):
                return None
            return self.notification_model.objects.create(
                recipient=recipient,
                sender=sender,
                notification_type=notification_type,
                target_type=target_type,
                target_id=target_id,
                content=_truncate(content, CONTENT_LIMIT) or None,
                metadata=metadata or None,
                created_at=self.clock(),
            )

    def create_notification_safely(self, recipient, sender, notification_type, **params):
        """
        Best-effort create used by the fan-out helpers.

        The same event from the same sender about the same target within
        DEDUPE_WINDOW is dropped. Failures are logged and rolled back to a
        savepoint, never raised.
        """
        target_id = params.get("target_id")
        try:
            with transaction.atomic():
                if (
                    recipient is not None
                    and sender is not None
                    and target_id
                    and self._is_recent_duplicate(recipient, sender, notification_type, str(target_id))
                ):
                    return None
                return self.create_notification(recipient, sender, notification_type, **params)
        except Exception:
            logger.exception(
                "Failed to create %s notification for user %s",
                notification_type,
                getattr(recipient, "pk", None),
            )
            return None

    def notify_follow(self, followed, follower):
        return self.create_notification_safely(
            followed, follower, Notification.TYPE_FOLLOW, target_id=follower.pk
        )

    def notify_reaction(self, target_user, reactor, target_type, target_id, reaction_type):
        return self.create_notification_safely(
            target_user,
            reactor,
            Notification.TYPE_REACTION,
            target_type=target_type,
            target_id=target_id,
            metadata={"reaction_type": reaction_type, "target_type": target_type},
        )

    def notify_comment(self, log_owner, commenter, log_id, comment_content):
        return self.create_notification_safely(
            log_owner,
            commenter,
            Notification.TYPE_COMMENT,
            target_type=Notification.TARGET_LOG,
            target_id=log_id,
            content=_preview(comment_content),
        )

    def notify_reply(self, thread_owner, replier, thread_id):
        return self.create_notification_safely(
            thread_owner,
            replier,
            Notification.TYPE_REPLY,
            target_type=Notification.TARGET_THREAD,
            target_id=thread_id,
        )

    def notify_quote(self, quoted_user, quoter, reply_id, quoted_text=None):
        metadata = {"quoted_text": quoted_text} if quoted_text else None
        return self.create_notification_safely(
            quoted_user,
            quoter,
            Notification.TYPE_QUOTE,
            target_type=Notification.TARGET_REPLY,
            target_id=reply_id,
            metadata=metadata,
        )

    def notify_mention(self, mentioned, mentioner, target_type, target_id, content=None):
        return self.create_notification_safely(
            mentioned,
            mentioner,
            Notification.TYPE_COMMENT,
            target_type=target_type,
            target_id=target_id,
            content=_preview(content),
            metadata={"mention": True},
        )

    def notify_many(self, recipients, sender, notification_type, **params):
        """Fan one event out to several recipients; one result per recipient."""
        results = []
        for recipient in recipients:
            notification = self.create_notification_safely(recipient, sender, notification_type, **params)
            results.append({
                "user_id": recipient.pk,
                "success": notification is not None,
                "notification_id": notification.pk if notification else None,
            })
        return results

    # -- reads ----------------------------------------------------------

    def _target_details(self, notification):
        if not (notification.target_type and notification.target_id):
            return None
        try:
            return self.content_store.fetch(notification.target_type, notification.target_id)
        except Exception as exc:
            logger.warning(
                "Failed to fetch %s %s for notification %s: %s",
                notification.target_type,
                notification.target_id,
                notification.pk,
                exc,
            )
            return None

    def _enrich(self, notification):
        data = dict(NotificationSerializer(notification).data)
        data["from_user"] = dict(PublicUserSerializer(notification.sender).data)
        data["target_details"] = self._target_details(notification)
        return data

    def get_notifications(self, caller, limit=DEFAULT_FEED_LIMIT, only_unread=False):
        """Newest-first feed for the caller; ``limit=None`` returns everything."""
        if not is_resolved(caller):
            return []
        qs = self.notification_model.objects.visible_to(caller).select_related("sender")
        if only_unread:
            qs = qs.unread()
        qs = qs.newest_first()
        if limit is not None:
            limit = int(limit)
            if limit <= 0:
                return []
            qs = qs[:limit]
        return [self._enrich(notification) for notification in qs]

    def get_unread_count(self, caller):
        if not is_resolved(caller):
            return 0
        return self.notification_model.objects.visible_to(caller).unread().count()

    # -- read state / deletion -----------------------------------------

    def _owned(self, caller, notification_id):
        try:
            return self.notification_model.objects.filter(pk=notification_id, recipient=caller)
        except (ValidationError, ValueError):
            raise NotFound("Notification not found.")

    def mark_as_read(self, caller, notification_id):
        caller = require_caller(caller)
        with transaction.atomic():
            matched = self._owned(caller, notification_id).update(is_read=True)
        if not matched:
            raise NotFound("Notification not found.")
        return True

    def mark_all_as_read(self, caller):
        """Flip every unread row in one UPDATE so no reader sees a half-marked inbox."""
        caller = require_caller(caller)
        with transaction.atomic():
            marked = self.notification_model.objects.filter(recipient=caller, is_read=False).update(is_read=True)
        return {"marked": marked}

    def delete_notification(self, caller, notification_id):
        caller = require_caller(caller)
        deleted, _ = self._owned(caller, notification_id).delete()
        if not deleted:
            raise NotFound("Notification not found.")
        return True

    # -- maintenance ------------------------------------------------------

    def cleanup_old_notifications(self, retention_days=None):
        """Delete rows older than the retention window across all users, in bounded batches."""
        if retention_days is None:
            retention_days = settings.SOCIAL_NOTIFICATION_RETENTION_DAYS
        cutoff = self.clock() - timedelta(days=retention_days)
        deleted = 0
        for _ in range(CLEANUP_MAX_BATCHES):
            batch = list(
                self.notification_model.objects.filter(created_at__lt=cutoff)
                .order_by("created_at")
                .values_list("id", flat=True)[:CLEANUP_BATCH]
            )
            if not batch:
                break
            try:
                with transaction.atomic():
                    count, _ = self.notification_model.objects.filter(id__in=batch).delete()
            except DatabaseError:
                logger.exception("Notification sweep stopped early; remaining rows wait for the next run")
                break
            deleted += count
        logger.info("Notification sweep removed %s rows older than %s", deleted, cutoff.isoformat())
        return {"deleted": deleted, "cutoff": cutoff}
