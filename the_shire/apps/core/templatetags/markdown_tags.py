"""Markdown template filters: render_markdown, markdown_snippet."""

from django import template

register = template.Library()


@register.filter
def render_markdown(text):
    """Convert markdown text to sanitized HTML."""
    from the_shire.apps.core.markdown import render_markdown_html

    return render_markdown_html(text)


@register.filter
def markdown_snippet(text, length=200):
    """Plain-text summary of markdown text.

    Usage in templates::

        {{ post.excerpt|default:post.content|markdown_snippet:160 }}
    """
    from the_shire.apps.core.markdown import markdown_snippet as _snippet

    return _snippet(text, int(length))
