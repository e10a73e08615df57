"""Sync users from the external identity provider."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from django.contrib.auth import get_user_model
from django.db import transaction

from .models import Profile

if TYPE_CHECKING:
    from django.contrib.auth.models import User

logger = logging.getLogger(__name__)

UserModel = cast("type[User]", get_user_model())


@transaction.atomic
def upsert_user(
    user_id: str,
    *,
    email: str = "",
    first_name: str = "",
    last_name: str = "",
    profile_image_url: str = "",
) -> User:
    """Insert or update the user identified by the provider's ``user_id``.

    Called from the identity provider's login callback. Every call
    overwrites the profile fields and refreshes the profile's ``updated_at``.

    Raises:
        ValueError: If ``user_id`` is blank.
    """
    user_id = (user_id or "").strip()
    if not user_id:
        raise ValueError("user_id is required")

    user, created = UserModel.objects.update_or_create(
        username=user_id,
        defaults={
            "email": email or "",
            "first_name": first_name or "",
            "last_name": last_name or "",
        },
    )
    if created:
        user.set_unusable_password()
        user.save(update_fields=["password"])

    Profile.objects.update_or_create(
        user=user, defaults={"profile_image_url": profile_image_url or ""}
    )
    logger.info("User upserted", extra={"upserted_user": user_id, "user_created": created})
    return user
