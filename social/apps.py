from django.apps import AppConfig

class SocialConfig(AppConfig):
    """Django app config for the social graph and notification core."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'social'
