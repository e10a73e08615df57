"""Storing and reading contact messages."""

from __future__ import annotations

import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from .models import ContactMessage

logger = logging.getLogger(__name__)


def create_contact_message(
    *, name: str, email: str, subject: str, message: str, ip_address: str | None = None
) -> ContactMessage:
    """Validate and store a visitor's message.

    Raises:
        ValidationError: If a field is missing or the subject is not one of
            ``ContactMessage.Subject``.
    """
    contact = ContactMessage(
        name=name, email=email, subject=subject, message=message, ip_address=ip_address
    )
    contact.full_clean()
    contact.save()
    logger.info(
        "Contact message received",
        extra={"contact_message_id": contact.pk, "subject": contact.subject},
    )
    return contact


def list_contact_messages():
    """All messages, newest first."""
    return ContactMessage.objects.order_by("-created_at")


def rate_limit_exceeded(ip_address: str | None) -> bool:
    """Return True when ``ip_address`` has sent too many messages recently."""
    if not ip_address:
        return False
    window_start = timezone.now() - timedelta(minutes=settings.RATE_LIMIT_WINDOW_MINUTES)
    recent = ContactMessage.objects.filter(
        ip_address=ip_address, created_at__gte=window_start
    ).count()
    return recent >= settings.RATE_LIMIT_CONTACT_PER_IP
