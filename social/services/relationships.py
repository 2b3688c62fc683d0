"""Follow / block state machine for one caller.

Uniqueness of edges is decided by the database's unique constraints: the
existence checks below give friendly errors in the common case, and a racing
insert that loses surfaces as IntegrityError, which maps to AlreadyExists.
"""

import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from social.errors import AlreadyExists, Forbidden, NotFound, SelfReference
from social.identity import identity_key, is_resolved, require_caller
from social.pagination import paginate
from social.repos.blocks_repo import BlocksRepo
from social.repos.follows_repo import FollowsRepo
from social.repos.user_repo import UserRepo
from social.services.notifications import NotificationService
from social.services.rate_limits import RateLimiter
from social.services.social_queries import SocialQueryService

logger = logging.getLogger(__name__)

BAD_ID_ERRORS = (ValueError, TypeError, ValidationError)


class RelationshipService:
    def __init__(self, caller, users=None, follows=None, blocks=None, notifications=None, rate_limiter=None):
        self.caller = caller
        self.users = users or UserRepo()
        self.follows = follows or FollowsRepo()
        self.blocks = blocks or BlocksRepo()
        self.notifications = notifications or NotificationService(blocks_repo=self.blocks)
        self.rate_limiter = rate_limiter or RateLimiter()

    def _target(self, target_id):
        try:
            target = self.users.get_by_id(target_id)
        except BAD_ID_ERRORS:
            target = None
        if target is None:
            raise NotFound("Target user not found.")
        return target

    # -- follows ----------------------------------------------------------

    def follow(self, target_id):
        caller = require_caller(self.caller)
        self.rate_limiter.enforce_action("follow", identity_key(caller))
        target = self._target(target_id)
        if caller.pk == target.pk:
            raise SelfReference("Cannot follow yourself.")

        try:
            with transaction.atomic():
                if self.follows.is_following(follower_id=caller.pk, following_id=target.pk):
                    raise AlreadyExists("Already following this user.")
                if self.blocks.has_blocked(blocker_id=target.pk, blocked_id=caller.pk):
                    raise Forbidden("Cannot follow this user.")
                edge = self.follows.create(follower=caller, following=target)
        except IntegrityError:
            raise AlreadyExists("Already following this user.")

        logger.info("User %s followed %s", caller.pk, target.pk)
        # Runs in its own savepoint; a failure here never undoes the follow.
        self.notifications.notify_follow(target, caller)
        return edge

    def unfollow(self, target_id):
        caller = require_caller(self.caller)
        try:
            with transaction.atomic():
                deleted = self.follows.delete(follower_id=caller.pk, following_id=target_id)
        except BAD_ID_ERRORS:
            deleted = 0
        if not deleted:
            raise NotFound("Not following this user.")
        logger.info("User %s unfollowed %s", caller.pk, target_id)
        return True

    def is_following(self, target_id):
        """Convenience read for UI state; anonymous callers simply get False."""
        if not is_resolved(self.caller):
            return False
        try:
            return self.follows.is_following(follower_id=self.caller.pk, following_id=target_id)
        except BAD_ID_ERRORS:
            return False

    def get_followers(self, target_id, page_size=None, cursor=None):
        page = paginate(self.follows.followers_of(target_id), page_size=page_size, cursor=cursor)
        page.page = [
            {"user": edge.follower, "followed_at": edge.created_at}
            for edge in page.page
            if edge.follower.is_active
        ]
        return page

    def get_following(self, target_id, page_size=None, cursor=None):
        page = paginate(self.follows.following_of(target_id), page_size=page_size, cursor=cursor)
        page.page = [
            {"user": edge.following, "followed_at": edge.created_at}
            for edge in page.page
            if edge.following.is_active
        ]
        return page

    def get_follow_counts(self, target_id):
        return SocialQueryService(self.caller, users=self.users, follows=self.follows, blocks=self.blocks).get_follow_counts(target_id)

    def get_mutual_follows(self, target_id, limit=5):
        return SocialQueryService(self.caller, users=self.users, follows=self.follows, blocks=self.blocks).get_mutual_follows(target_id, limit)

    def get_follow_suggestions(self, limit=10):
        return SocialQueryService(self.caller, users=self.users, follows=self.follows, blocks=self.blocks).get_follow_suggestions(limit)

    def can_see_user_content(self, user_id, visibility):
        return SocialQueryService(self.caller, users=self.users, follows=self.follows, blocks=self.blocks).can_see_user_content(user_id, visibility)

    def can_see_users_content(self, pairs):
        return SocialQueryService(self.caller, users=self.users, follows=self.follows, blocks=self.blocks).can_see_users_content(pairs)

    # -- blocks -----------------------------------------------------------

    def block(self, target_id):
        caller = require_caller(self.caller)
        self.rate_limiter.enforce_action("block", identity_key(caller))
        target = self._target(target_id)
        if caller.pk == target.pk:
            raise SelfReference("Cannot block yourself.")

        try:
            with transaction.atomic():
                if self.blocks.has_blocked(blocker_id=caller.pk, blocked_id=target.pk):
                    raise AlreadyExists("User is already blocked.")
                edge = self.blocks.create(blocker=caller, blocked=target)
                if getattr(settings, "SOCIAL_BLOCK_SEVERS_FOLLOWS", False):
                    self.follows.delete(follower_id=caller.pk, following_id=target.pk)
                    self.follows.delete(follower_id=target.pk, following_id=caller.pk)
        except IntegrityError:
            raise AlreadyExists("User is already blocked.")

        logger.info("User %s blocked %s", caller.pk, target.pk)
        return edge

    def unblock(self, target_id):
        caller = require_caller(self.caller)
        try:
            with transaction.atomic():
                deleted = self.blocks.delete(blocker_id=caller.pk, blocked_id=target_id)
        except BAD_ID_ERRORS:
            deleted = 0
        if not deleted:
            raise NotFound("User is not blocked.")
        logger.info("User %s unblocked %s", caller.pk, target_id)
        return True

    def is_blocked(self, target_id):
        """True when the caller has blocked target_id."""
        if not is_resolved(self.caller):
            return False
        try:
            return self.blocks.has_blocked(blocker_id=self.caller.pk, blocked_id=target_id)
        except BAD_ID_ERRORS:
            return False

    def is_blocked_by(self, target_id):
        """True when target_id has blocked the caller."""
        if not is_resolved(self.caller):
            return False
        try:
            return self.blocks.has_blocked(blocker_id=target_id, blocked_id=self.caller.pk)
        except BAD_ID_ERRORS:
            return False

    def get_blocking_status(self, target_id):
        is_blocked = self.is_blocked(target_id)
        is_blocked_by = self.is_blocked_by(target_id)
        return {
            "is_blocked": is_blocked,
            "is_blocked_by": is_blocked_by,
            "can_interact": not is_blocked and not is_blocked_by,
        }

    def get_blocked_users(self, page_size=None, cursor=None):
        caller = require_caller(self.caller)
        page = paginate(self.blocks.blocks_by(caller.pk), page_size=page_size, cursor=cursor)
        page.page = [
            {"user": edge.blocked, "blocked_at": edge.created_at}
            for edge in page.page
            if edge.blocked.is_active
        ]
        return page

    def filter_blocked_users(self, user_ids):
        """Drop ids that have a block with the caller in either direction."""
        if not is_resolved(self.caller):
            return list(user_ids)
        related = self.blocks.related_ids(self.caller.pk)
        return [user_id for user_id in user_ids if user_id not in related]

    def check_users_blocked(self, user_ids):
        return SocialQueryService(self.caller, users=self.users, follows=self.follows, blocks=self.blocks).check_users_blocked(user_ids)
