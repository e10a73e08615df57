"""Health check helpers."""

from __future__ import annotations

from django.db import connection

from the_shire.apps.blog.models import BlogPost


def check_db_and_orm() -> dict:
    """Verify DB connectivity and ORM access by touching the posts table."""
    details: dict[str, object] = {}
    connection.ensure_connection()
    details["db"] = "ok"

    post_id = BlogPost.objects.order_by("created_at").values_list("id", flat=True).first()
    details["orm_post_sample"] = str(post_id) if post_id is not None else "none"
    return details
