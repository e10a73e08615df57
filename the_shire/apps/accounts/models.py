"""Accounts domain models."""

from django.conf import settings
from django.db import models

from the_shire.apps.core.models import TimeStampedMixin


class Profile(TimeStampedMixin):
    """Identity-provider profile data kept alongside the auth user.

    The provider's subject id is the user's ``username``.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile"
    )
    profile_image_url = models.URLField(max_length=500, blank=True)

    class Meta:
        ordering = ["user__username"]

    def __str__(self) -> str:
        return self.display_name

    @property
    def display_name(self) -> str:
        full_name = self.user.get_full_name()
        return full_name or self.user.get_username()
