"""Forms for blog posts."""

from __future__ import annotations

from collections.abc import Iterable

from django import forms

from the_shire.apps.core.forms import MarkdownEditorWidget, StyledFormMixin


def parse_tags(value: str | Iterable[str] | None) -> list[str]:
    """Normalize tag input to a list of trimmed, non-empty strings.

    Accepts the comma-separated string a text input submits or a sequence
    of strings (JSON clients, prefilled initial data).

    Examples:
        "shire, hobbits , ,ale" -> ["shire", "hobbits", "ale"]
        ["  shire ", ""] -> ["shire"]
    """
    if value is None:
        return []
    parts = value.split(",") if isinstance(value, str) else list(value)
    return [str(part).strip() for part in parts if str(part).strip()]


class BlogPostForm(StyledFormMixin, forms.Form):
    """Admin form for creating and editing posts.

    Persistence goes through the post repository; this form only parses
    and shapes the input.
    """

    STATUS_DRAFT = "draft"
    STATUS_PUBLISHED = "published"
    STATUS_CHOICES = [
        (STATUS_DRAFT, "Save as Draft"),
        (STATUS_PUBLISHED, "Publish Now"),
    ]

    title = forms.CharField(max_length=200)
    excerpt = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={"rows": 3}),
        help_text="Short summary shown in post lists.",
    )
    content = forms.CharField(widget=MarkdownEditorWidget(attrs={"rows": 20}))
    featured_image = forms.URLField(required=False, max_length=500, assume_scheme="https")
    tags = forms.CharField(
        required=False,
        max_length=500,
        help_text="Comma-separated, e.g. adventure, hobbits",
    )
    status = forms.ChoiceField(choices=STATUS_CHOICES, initial=STATUS_DRAFT)

    @classmethod
    def initial_for(cls, post) -> dict:
        """Initial data for editing an existing post."""
        return {
            "title": post.title,
            "excerpt": post.excerpt,
            "content": post.content,
            "featured_image": post.featured_image,
            "tags": ", ".join(post.tags or []),
            "status": cls.STATUS_PUBLISHED if post.published else cls.STATUS_DRAFT,
        }

    def clean_tags(self) -> list[str]:
        return parse_tags(self.cleaned_data.get("tags"))

    def post_fields(self) -> dict:
        """Cleaned data shaped as repository keyword arguments."""
        data = self.cleaned_data
        return {
            "title": data["title"],
            "excerpt": data.get("excerpt", ""),
            "content": data["content"],
            "featured_image": data.get("featured_image", ""),
            "tags": data.get("tags", []),
            "published": data.get("status") == self.STATUS_PUBLISHED,
        }

    def add_model_errors(self, exc) -> None:
        """Attach a model ValidationError to the matching form fields."""
        if hasattr(exc, "error_dict"):
            for field, errors in exc.error_dict.items():
                self.add_error(field if field in self.fields else None, errors)
        else:
            self.add_error(None, exc)
