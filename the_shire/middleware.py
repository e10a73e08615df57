"""Request middleware that feeds the log context."""

from __future__ import annotations

import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse
from ipware import get_client_ip

from the_shire.logging import bind_log_context, reset_log_context

# URL kwargs that identify a blog post, and the log field each one binds.
POST_ROUTE_KWARGS = {"pk": "post_id", "slug": "post_slug"}


class RequestContextMiddleware:
    """Bind request, user and post identifiers into the log context.

    ``__call__`` binds the request id, route and caller. ``process_view``
    adds the resolved view name and the post being read or edited, taken
    from the URL kwargs. Everything is unbound when the response is built.
    The request id is echoed in the ``X-Request-ID`` response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.request_id = request_id  # type: ignore[attr-defined]

        user = getattr(request, "user", None)
        signed_in = bool(user is not None and user.is_authenticated)
        remote_ip, _ = get_client_ip(request)

        token = bind_log_context(
            request_id=request_id,
            method=request.method,
            path=request.path,
            username=user.get_username() if signed_in else None,
            remote_ip=remote_ip,
        )
        try:
            response = self.get_response(request)
        finally:
            reset_log_context(token)

        response.headers.setdefault("X-Request-ID", request_id)
        return response

    def process_view(self, request, view_func, view_args, view_kwargs):
        match = getattr(request, "resolver_match", None)
        fields = {
            field: str(view_kwargs[kwarg])
            for kwarg, field in POST_ROUTE_KWARGS.items()
            if kwarg in view_kwargs
        }
        # Reset together with the request-level binding in __call__.
        bind_log_context(view=match.url_name if match else None, **fields)
        return None
