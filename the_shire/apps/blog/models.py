"""Blog domain models."""

from __future__ import annotations

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from simple_history.models import HistoricalRecords

from the_shire.apps.core.models import TimeStampedMixin

from .slugs import slugify


def validate_tags(value) -> None:
    """Tags must be a list of strings."""
    if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
        raise ValidationError("Tags must be a list of strings.")


class BlogPostQuerySet(models.QuerySet):
    """Custom queryset for BlogPost."""

    def newest_first(self):
        return self.order_by("-created_at")

    def published(self):
        return self.filter(published=True)

    def drafts(self):
        return self.filter(published=False)

    def search(self, query: str = ""):
        """Case-insensitive substring search across title, content, and excerpt.

        Returns empty queryset if query is empty/whitespace.
        Caller is responsible for ordering.
        """
        query = (query or "").strip()
        if not query:
            return self.none()

        return self.filter(
            models.Q(title__icontains=query)
            | models.Q(content__icontains=query)
            | models.Q(excerpt__icontains=query)
        )


class BlogPost(TimeStampedMixin):
    """A blog post ("chronicle"). The slug always follows the title."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True, editable=False)
    excerpt = models.TextField(blank=True, help_text="Short summary shown in post lists.")
    content = models.TextField(help_text="Markdown body.")
    featured_image = models.URLField(max_length=500, blank=True)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_posts",
    )
    published = models.BooleanField(default=False)
    tags = models.JSONField(default=list, blank=True, validators=[validate_tags])

    objects = BlogPostQuerySet.as_manager()
    history = HistoricalRecords()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["published", "created_at"], name="blog_post_published_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    def clean(self):
        """Derive the slug from the title and check it can be stored."""
        self.slug = slugify(self.title or "")
        if not self.title:
            # clean_fields() already reports the missing title
            return
        if not self.slug:
            raise ValidationError({"title": "Title must produce a valid slug."})
        max_slug_length = self._meta.get_field("slug").max_length
        if len(self.slug) > max_slug_length:
            raise ValidationError(
                {"title": f"Title produces a slug longer than {max_slug_length} characters."}
            )
        collision = BlogPost.objects.filter(slug=self.slug).exclude(pk=self.pk).exists()
        if collision:
            raise ValidationError(
                {"title": f"A post with the slug '{self.slug}' already exists."}
            )

    def save(self, *args, **kwargs):
        self.slug = slugify(self.title or "")
        super().save(*args, **kwargs)

    @property
    def status_label(self) -> str:
        return "Published" if self.published else "Draft"
