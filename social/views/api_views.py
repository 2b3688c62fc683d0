"""JSON endpoints over the relationship, notification and social-query services.

Each view resolves the caller from ``request.user`` and delegates; typed
``social.errors`` exceptions are rendered by DRF with their own status codes.
"""

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from social.serializers import BlockEntrySerializer, FollowEntrySerializer, PublicUserSerializer
from social.services import NotificationService, RelationshipService, SocialQueryService


def _page_response(page, serializer_class):
    return Response({
        "page": serializer_class(page.page, many=True).data,
        "continue_cursor": page.continue_cursor,
        "is_done": page.is_done,
    })


def _page_args(request):
    return {
        "page_size": request.query_params.get("page_size"),
        "cursor": request.query_params.get("cursor"),
    }


def _flag(value):
    return str(value).lower() in ("1", "true", "yes")


# -- relationships ------------------------------------------------------------

@api_view(["POST", "DELETE"])
@permission_classes([IsAuthenticated])
def follow(request, user_id):
    """POST follows the user, DELETE unfollows."""
    service = RelationshipService(request.user)
    if request.method == "DELETE":
        service.unfollow(user_id)
        return Response({"success": True})
    edge = service.follow(user_id)
    return Response({"id": str(edge.id), "followed_at": edge.created_at}, status=status.HTTP_201_CREATED)


@api_view(["GET"])
@permission_classes([AllowAny])
def is_following(request, user_id):
    return Response({"is_following": RelationshipService(request.user).is_following(user_id)})


@api_view(["POST", "DELETE"])
@permission_classes([IsAuthenticated])
def block(request, user_id):
    """POST blocks the user, DELETE unblocks."""
    service = RelationshipService(request.user)
    if request.method == "DELETE":
        service.unblock(user_id)
        return Response({"success": True})
    edge = service.block(user_id)
    return Response({"id": str(edge.id), "blocked_at": edge.created_at}, status=status.HTTP_201_CREATED)


@api_view(["GET"])
@permission_classes([AllowAny])
def blocking_status(request, user_id):
    return Response(RelationshipService(request.user).get_blocking_status(user_id))


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def blocked_users(request):
    page = RelationshipService(request.user).get_blocked_users(**_page_args(request))
    return _page_response(page, BlockEntrySerializer)


@api_view(["GET"])
@permission_classes([AllowAny])
def followers(request, user_id):
    page = RelationshipService(request.user).get_followers(user_id, **_page_args(request))
    return _page_response(page, FollowEntrySerializer)


@api_view(["GET"])
@permission_classes([AllowAny])
def following(request, user_id):
    page = RelationshipService(request.user).get_following(user_id, **_page_args(request))
    return _page_response(page, FollowEntrySerializer)


# -- social queries -------------------------------------------------------------

@api_view(["GET"])
@permission_classes([AllowAny])
def follow_counts(request, user_id):
    return Response(SocialQueryService(request.user).get_social_stats(user_id))


@api_view(["GET"])
@permission_classes([AllowAny])
def mutual_follows(request, user_id):
    users = SocialQueryService(request.user).get_mutual_follows(user_id, request.query_params.get("limit"))
    return Response(PublicUserSerializer(users, many=True).data)


@api_view(["GET"])
@permission_classes([AllowAny])
def social_context(request, user_id):
    return Response(SocialQueryService(request.user).get_social_context(user_id))


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def follow_suggestions(request):
    users = SocialQueryService(request.user).get_follow_suggestions(request.query_params.get("limit"))
    return Response(PublicUserSerializer(users, many=True).data)


# -- notifications --------------------------------------------------------------

@api_view(["GET"])
@permission_classes([IsAuthenticated])
def notifications(request):
    try:
        limit = int(request.query_params.get("limit", 20))
    except ValueError:
        limit = 20
    feed = NotificationService().get_notifications(
        request.user,
        limit=limit,
        only_unread=_flag(request.query_params.get("only_unread")),
    )
    return Response(feed)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def unread_count(request):
    return Response({"unread": NotificationService().get_unread_count(request.user)})


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def mark_notification_read(request, notification_id):
    NotificationService().mark_as_read(request.user, notification_id)
    return Response({"success": True})


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def mark_all_notifications_read(request):
    return Response(NotificationService().mark_all_as_read(request.user))


@api_view(["DELETE"])
@permission_classes([IsAuthenticated])
def delete_notification(request, notification_id):
    NotificationService().delete_notification(request.user, notification_id)
    return Response(status=status.HTTP_204_NO_CONTENT)
