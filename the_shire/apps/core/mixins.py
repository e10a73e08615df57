"""Reusable view mixins for the core app."""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth.mixins import LoginRequiredMixin

if TYPE_CHECKING:
    from django.http import HttpRequest


class PortalSectionMixin(LoginRequiredMixin):
    """
    Mixin for admin portal views.

    Behavior:
    - Unauthenticated users -> redirect to login
    - ``portal_section`` is exposed to templates so the portal navigation
      can highlight the current section
    """

    request: HttpRequest  # Provided by View
    portal_section = ""

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)  # type: ignore[misc]
        context["portal_section"] = self.portal_section
        return context
