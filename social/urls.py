from django.urls import path

from social.views import api_views

urlpatterns = [
    path('users/<int:user_id>/follow/', api_views.follow, name='follow'),
    path('users/<int:user_id>/is-following/', api_views.is_following, name='is_following'),
    path('users/<int:user_id>/block/', api_views.block, name='block'),
    path('users/<int:user_id>/blocking-status/', api_views.blocking_status, name='blocking_status'),
    path('users/<int:user_id>/followers/', api_views.followers, name='followers'),
    path('users/<int:user_id>/following/', api_views.following, name='following'),
    path('users/<int:user_id>/counts/', api_views.follow_counts, name='follow_counts'),
    path('users/<int:user_id>/mutual/', api_views.mutual_follows, name='mutual_follows'),
    path('users/<int:user_id>/social-context/', api_views.social_context, name='social_context'),
    path('blocks/', api_views.blocked_users, name='blocked_users'),
    path('suggestions/', api_views.follow_suggestions, name='follow_suggestions'),
    path('notifications/', api_views.notifications, name='notifications'),
    path('notifications/unread-count/', api_views.unread_count, name='unread_count'),
    path('notifications/read-all/', api_views.mark_all_notifications_read, name='mark_all_notifications_read'),
    path('notifications/<uuid:notification_id>/read/', api_views.mark_notification_read, name='mark_notification_read'),
    path('notifications/<uuid:notification_id>/', api_views.delete_notification, name='delete_notification'),
]
