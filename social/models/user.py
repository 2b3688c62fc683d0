"""Custom user model linked to an external identity provider."""

from django.core.validators import RegexValidator, MaxLengthValidator
from django.contrib.auth.models import AbstractUser
from django.db import models
from libgravatar import Gravatar

class User(AbstractUser):
    """Model for auth and public profile info."""

    username = models.CharField(
        max_length=30,
        unique=True,
        validators=[RegexValidator(
            regex=r'^@?\w{3,}$',
            message='Username must consist of at least three alphanumericals'
        )]
    )
    # Subject issued by the identity provider; one internal user per identity.
    external_id = models.CharField(max_length=128, unique=True, null=True, blank=True)
    email = models.EmailField(unique=True, blank=False)
    bio = models.TextField(
        max_length=500,
        blank=True,
        help_text="short user bio shown on profile",
        validators=[MaxLengthValidator(500)]
    )
    profile_image = models.URLField(blank=True)

    class Meta:
        """Default ordering for users."""
        ordering = ['-date_joined']

    def display_name(self):
        """Return full name, falling back to the username."""
        full_name = f'{self.first_name} {self.last_name}'.strip()
        return full_name or self.username

    def gravatar(self, size=120):
        """Return gravatar URL for the user's email."""
        gravatar_object = Gravatar(self.email)
        gravatar_url = gravatar_object.get_image(size=size, default='mp')
        return gravatar_url

    @property
    def avatar_url(self):
        """Preferred avatar URL for profile display."""
        return self.profile_image or self.gravatar(size=200)
