"""Post repository: create, update, delete, and query blog posts.

Lookups return ``None`` for missing posts so callers can decide how to
present "not found". Mutations raise ``django.core.exceptions.ValidationError``
for bad input and ``BlogPost.DoesNotExist`` when updating a missing post.
Authorization is the caller's job; nothing here checks who is asking.
"""

from __future__ import annotations

import logging
from typing import Any

from django.core.exceptions import ValidationError

from .models import BlogPost, BlogPostQuerySet

logger = logging.getLogger(__name__)

# Fields a partial update may change; slug, id and timestamps are derived.
EDITABLE_FIELDS = frozenset(
    ["title", "excerpt", "content", "featured_image", "author", "published", "tags"]
)


def _assign_author(post: BlogPost, author) -> None:
    try:
        post.author = author
    except ValueError as exc:
        raise ValidationError({"author": "Author must be a user."}) from exc


def _lookup(**filters) -> BlogPost | None:
    try:
        return BlogPost.objects.select_related("author").get(**filters)
    except (BlogPost.DoesNotExist, ValidationError, ValueError):
        # Malformed ids (not a UUID) are treated like missing ones
        return None


def create_post(
    *,
    title: str,
    content: str,
    author,
    excerpt: str = "",
    featured_image: str = "",
    published: bool = False,
    tags: list[str] | None = None,
) -> BlogPost:
    """Validate and store a new post, deriving its slug from the title.

    ``tags`` must already be a list of strings; a comma-separated string is
    rejected, not split. Form input goes through ``forms.parse_tags`` first.

    Raises:
        ValidationError: If title, content, or author is missing or
            malformed, ``tags`` is not a list of strings, the title has no
            slug-able characters, or the slug is too long or already taken.
    """
    post = BlogPost(
        title=title or "",
        content=content or "",
        excerpt=excerpt or "",
        featured_image=featured_image or "",
        published=published,
        tags=[] if tags is None else tags,
    )
    if author is not None:
        _assign_author(post, author)
    post.full_clean(exclude=["slug"])
    post.save()
    logger.info(
        "Blog post created",
        extra={"post_id": str(post.pk), "slug": post.slug, "published": post.published},
    )
    return post


def update_post(post_id, **changes: Any) -> BlogPost:
    """Apply a partial update to an existing post.

    Changing ``title`` re-derives the slug. ``updated_at`` is refreshed on
    every successful update.

    Raises:
        BlogPost.DoesNotExist: If no post has ``post_id``.
        ValidationError: If ``changes`` names a field that cannot be edited or
            the merged post is invalid.
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

    post = _lookup(pk=post_id)
    if post is None:
        raise BlogPost.DoesNotExist(f"No blog post with id {post_id!r}")

    old_slug = post.slug
    for field, value in changes.items():
        if field == "author":
            _assign_author(post, value)
            continue
        if field == "tags" and value is None:
            value = []
        setattr(post, field, value)
    post.full_clean(exclude=["slug"])
    post.save()
    logger.info(
        "Blog post updated",
        extra={
            "post_id": str(post.pk),
            "fields": sorted(changes),
            "slug_changed": post.slug != old_slug,
        },
    )
    return post


def delete_post(post_id) -> bool:
    """Delete a post. Deleting a missing post is a no-op.

    Returns:
        True if a post was removed.
    """
    try:
        deleted, _ = BlogPost.objects.filter(pk=post_id).delete()
    except (ValidationError, ValueError):
        return False
    if deleted:
        logger.info("Blog post deleted", extra={"post_id": str(post_id)})
    return bool(deleted)


def get_post(post_id) -> BlogPost | None:
    return _lookup(pk=post_id)


def get_post_by_slug(slug: str) -> BlogPost | None:
    return _lookup(slug=slug)


def list_posts(published: bool | None = None) -> BlogPostQuerySet:
    """All posts newest first, optionally only those with the given ``published`` flag."""
    posts = BlogPost.objects.select_related("author")
    if published is not None:
        posts = posts.filter(published=published)
    return posts.newest_first()


def search_posts(query: str) -> BlogPostQuerySet:
    """Posts whose title, content, or excerpt contains ``query``, newest first.

    A blank query matches nothing.
    """
    return BlogPost.objects.select_related("author").search(query).newest_first()
