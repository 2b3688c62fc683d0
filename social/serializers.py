from rest_framework import serializers

from social.errors import InvalidMetadata
from social.models import Notification, User


class PublicUserSerializer(serializers.ModelSerializer):
    """Public profile fields safe to show to any viewer."""
    display_name = serializers.CharField(read_only=True)
    avatar_url = serializers.ReadOnlyField()

    class Meta:
        model = User
        fields = ["id", "username", "display_name", "bio", "avatar_url", "date_joined"]
        read_only_fields = fields


class NotificationSerializer(serializers.ModelSerializer):
    """Serializer for stored notification rows."""
    type = serializers.CharField(source="notification_type", read_only=True)
    from_user_id = serializers.IntegerField(source="sender_id", read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "type",
            "from_user_id",
            "target_type",
            "target_id",
            "content",
            "metadata",
            "is_read",
            "created_at",
        ]
        read_only_fields = fields


class FollowEntrySerializer(serializers.Serializer):
    user = PublicUserSerializer()
    followed_at = serializers.DateTimeField()


class BlockEntrySerializer(serializers.Serializer):
    user = PublicUserSerializer()
    blocked_at = serializers.DateTimeField()


# Metadata is a tagged union keyed by notification type: known fields are
# validated per type, anything else is passed through untouched.

class ReactionMetadataSerializer(serializers.Serializer):
    reaction_type = serializers.CharField(max_length=32)
    target_type = serializers.ChoiceField(choices=Notification.TARGET_TYPES, required=False)


class CommentMetadataSerializer(serializers.Serializer):
    mention = serializers.BooleanField(required=False)


class ReplyMetadataSerializer(serializers.Serializer):
    thread_title = serializers.CharField(max_length=200, required=False, allow_blank=True)


class QuoteMetadataSerializer(serializers.Serializer):
    quoted_text = serializers.CharField(max_length=500, required=False, allow_blank=True)


METADATA_SERIALIZERS = {
    Notification.TYPE_REACTION: ReactionMetadataSerializer,
    Notification.TYPE_COMMENT: CommentMetadataSerializer,
    Notification.TYPE_REPLY: ReplyMetadataSerializer,
    Notification.TYPE_QUOTE: QuoteMetadataSerializer,
}


def validate_metadata(notification_type, metadata):
    """Return cleaned metadata for ``notification_type`` or raise InvalidMetadata."""
    if metadata is None:
        return None
    if not isinstance(metadata, dict):
        raise InvalidMetadata("Notification metadata must be an object.")
    serializer_class = METADATA_SERIALIZERS.get(notification_type)
    if serializer_class is None:
        return dict(metadata)
    serializer = serializer_class(data=metadata)
    if not serializer.is_valid():
        raise InvalidMetadata(serializer.errors)
    passthrough = {k: v for k, v in metadata.items() if k not in serializer.fields}
    return {**passthrough, **serializer.validated_data}
