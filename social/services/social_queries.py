"""Read-only analytics over the follow/block graph."""

from social.identity import is_resolved
from social.pagination import clamp
from social.repos.blocks_repo import BlocksRepo
from social.repos.follows_repo import FollowsRepo
from social.repos.user_repo import UserRepo

MUTUAL_SCAN_LIMIT = 100

VISIBILITY_PUBLIC = "public"
VISIBILITY_FOLLOWERS = "followers"
VISIBILITY_PRIVATE = "private"


def _same_user(user, user_id):
    return str(user.pk) == str(user_id)


class SocialQueryService:
    """Counts, mutual follows, suggestions and relationship context for a caller."""

    def __init__(self, caller, users=None, follows=None, blocks=None):
        self.caller = caller
        self.users = users or UserRepo()
        self.follows = follows or FollowsRepo()
        self.blocks = blocks or BlocksRepo()

    def get_follow_counts(self, user_id):
        """Uncached counts; a full count of matching edges each call."""
        return {
            "followers": self.follows.follower_count(user_id),
            "following": self.follows.following_count(user_id),
        }

    def get_mutual_follows(self, target_id, limit=5):
        """
        Users followed by both the caller and the target.

        Walks the target's most recent follows (at most MUTUAL_SCAN_LIMIT edges),
        so this is an approximation for very large following lists.
        """
        if not is_resolved(self.caller) or _same_user(self.caller, target_id):
            return []
        limit = clamp(limit, default=5, low=1, high=20)
        mine = self.follows.following_ids(self.caller.pk)

        candidates = []
        for user_id in self.follows.recent_following_ids(target_id, MUTUAL_SCAN_LIMIT):
            if user_id in mine and user_id not in candidates:
                candidates.append(user_id)

        # Limit applies after in_bulk drops inactive users.
        found = self.users.in_bulk(candidates)
        return [found[user_id] for user_id in candidates if user_id in found][:limit]

    def get_follow_suggestions(self, limit=10):
        """Recently joined users the caller neither follows nor has a block with."""
        if not is_resolved(self.caller):
            return []
        limit = clamp(limit, default=10, low=1, high=50)
        excluded = (
            self.follows.following_ids(self.caller.pk)
            | self.blocks.related_ids(self.caller.pk)
            | {self.caller.pk}
        )
        pool = self.users.recent(limit * 3)
        return [user for user in pool if user.pk not in excluded][:limit]

    def get_social_context(self, target_id):
        """Relationship flags between the caller and target_id."""
        if not is_resolved(self.caller):
            return {
                "is_following": False,
                "is_followed_by": False,
                "is_blocked": False,
                "is_blocked_by": False,
                "can_interact": True,
                "can_follow": False,
            }
        if _same_user(self.caller, target_id):
            return {
                "is_following": False,
                "is_followed_by": False,
                "is_blocked": False,
                "is_blocked_by": False,
                "can_interact": False,
                "can_follow": False,
            }
        me = self.caller.pk
        is_following = self.follows.is_following(follower_id=me, following_id=target_id)
        is_blocked = self.blocks.has_blocked(blocker_id=me, blocked_id=target_id)
        is_blocked_by = self.blocks.has_blocked(blocker_id=target_id, blocked_id=me)
        can_interact = not is_blocked and not is_blocked_by
        return {
            "is_following": is_following,
            "is_followed_by": self.follows.is_following(follower_id=target_id, following_id=me),
            "is_blocked": is_blocked,
            "is_blocked_by": is_blocked_by,
            "can_interact": can_interact,
            "can_follow": can_interact and not is_following,
        }

    def get_social_stats(self, user_id):
        stats = self.get_follow_counts(user_id)
        mutual = 0
        if is_resolved(self.caller) and not _same_user(self.caller, user_id):
            mine = self.follows.following_ids(self.caller.pk)
            mutual = len(mine & self.follows.following_ids(user_id))
        stats["mutual_follows"] = mutual
        return stats

    # -- content visibility -------------------------------------------------

    def can_see_user_content(self, user_id, visibility):
        """Whether the caller may see content user_id published with this visibility."""
        if visibility == VISIBILITY_PUBLIC:
            return True
        if not is_resolved(self.caller):
            return False
        if _same_user(self.caller, user_id):
            return True
        if visibility != VISIBILITY_FOLLOWERS:
            return False
        me = self.caller.pk
        if self.blocks.between(me, user_id):
            return False
        return self.follows.is_following(follower_id=me, following_id=user_id)

    def can_see_users_content(self, pairs):
        """
        Batch form of can_see_user_content.

        ``pairs`` is an iterable of ``(user_id, visibility)``; the result maps
        each user_id to a bool. Follow and block sets are read once per call.
        """
        pairs = list(pairs)
        if not is_resolved(self.caller):
            return {user_id: visibility == VISIBILITY_PUBLIC for user_id, visibility in pairs}
        me = self.caller.pk
        following = {str(user_id) for user_id in self.follows.following_ids(me)}
        blocked = {str(user_id) for user_id in self.blocks.related_ids(me)}

        result = {}
        for user_id, visibility in pairs:
            if _same_user(self.caller, user_id) or visibility == VISIBILITY_PUBLIC:
                result[user_id] = True
            elif visibility == VISIBILITY_FOLLOWERS:
                key = str(user_id)
                result[user_id] = key not in blocked and key in following
            else:
                result[user_id] = False
        return result

    def check_users_blocked(self, user_ids):
        """Block flags between the caller and each of user_ids; empty for anonymous callers."""
        if not is_resolved(self.caller):
            return {}
        blocked = {str(user_id) for user_id in self.blocks.blocked_ids(self.caller.pk)}
        blocked_by = {str(user_id) for user_id in self.blocks.blocker_ids(self.caller.pk)}
        result = {}
        for user_id in user_ids:
            is_blocked = str(user_id) in blocked
            is_blocked_by = str(user_id) in blocked_by
            result[user_id] = {
                "is_blocked": is_blocked,
                "is_blocked_by": is_blocked_by,
                "can_interact": not is_blocked and not is_blocked_by,
            }
        return result
