from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from social.models import Block, Follow, Notification, RateWindowEntry, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """User admin with the identity-provider link and profile fields."""
    list_display = ('username', 'email', 'external_id', 'is_active', 'date_joined')
    search_fields = ('username', 'email', 'external_id')
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Profile', {'fields': ('external_id', 'bio', 'profile_image')}),
    )


@admin.register(Follow)
class FollowAdmin(admin.ModelAdmin):
    """Follow edges are immutable, so the admin only lists and deletes them."""
    list_display = ('follower', 'following', 'created_at')
    search_fields = ('follower__username', 'following__username')
    readonly_fields = ('follower', 'following', 'created_at')

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Block)
class BlockAdmin(admin.ModelAdmin):
    list_display = ('blocker', 'blocked', 'created_at')
    search_fields = ('blocker__username', 'blocked__username')

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Admin listing for notifications with a bulk mark-read action."""
    list_display = ('recipient', 'sender', 'notification_type', 'target_type', 'is_read', 'created_at')
    list_filter = ('notification_type', 'is_read', 'created_at')
    search_fields = ('recipient__username', 'sender__username', 'content')
    actions = ['mark_read']

    @admin.action(description='Mark selected notifications as read')
    def mark_read(self, request, queryset):
        """Flip is_read on the selection; read rows never flip back."""
        queryset.filter(is_read=False).update(is_read=True)


@admin.register(RateWindowEntry)
class RateWindowEntryAdmin(admin.ModelAdmin):
    list_display = ('key', 'timestamp')
    search_fields = ('key',)
