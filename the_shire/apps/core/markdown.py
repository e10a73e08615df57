"""Markdown rendering pipeline.

Converts post bodies to sanitized HTML for readers. Used by the
``render_markdown`` template filter. The admin editor's live preview uses
the smaller dialect in :mod:`the_shire.apps.core.editor`.
"""

import re

import nh3
from django.utils.safestring import mark_safe
from markdown_it import MarkdownIt

# CommonMark-compliant markdown parser.
# - linkify: auto-link bare URLs during parsing
# - breaks: single newlines become <br>
# - typographer + smartquotes/replacements: smart quotes, dashes, ellipsis
_md = MarkdownIt("commonmark", {"linkify": True, "breaks": True, "typographer": True}).enable(
    ["linkify", "replacements", "smartquotes", "table", "strikethrough"]
)

ALLOWED_TAGS = {
    "p",
    "br",
    "strong",
    "em",
    "s",
    "ul",
    "ol",
    "li",
    "code",
    "pre",
    "blockquote",
    "a",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "img",
    "hr",
    "table",
    "thead",
    "tbody",
    "tr",
    "th",
    "td",
    "figure",
    "figcaption",
}

ALLOWED_ATTRIBUTES = {
    "a": {"href", "title"},
    "img": {"src", "alt", "title"},
    "code": {"class"},
    "pre": {"class"},
    "th": {"align"},
    "td": {"align"},
}


def render_markdown_html(text: str | None) -> str:
    """Convert markdown text to sanitized HTML.

    Args:
        text: Raw markdown text.

    Returns:
        Sanitized HTML ``SafeString``, safe for direct use in templates.
    """
    if not text:
        return ""
    html = _md.render(text)
    safe_html = nh3.clean(html, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES)
    return mark_safe(safe_html)  # noqa: S308 - HTML sanitized by nh3


_FENCED_CODE_RE = re.compile(r"```.*?```", re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`.+?`")
_IMAGE_RE = re.compile(r"!\[.*?\]\(.*?\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_MARKUP_RE = re.compile(r"[#*>\-]{1,3}")
_WHITESPACE_RE = re.compile(r"\s+")


def markdown_snippet(text: str | None, length: int = 200) -> str:
    """Plain-text summary of markdown, truncated to ``length`` characters.

    Code and images are dropped, links keep their label, and markup
    characters are removed. Truncated output ends with an ellipsis.
    """
    if not text:
        return ""
    plain = _FENCED_CODE_RE.sub("", text)
    plain = _INLINE_CODE_RE.sub("", plain)
    plain = _IMAGE_RE.sub("", plain)
    plain = _LINK_RE.sub(r"\1", plain)
    plain = _MARKUP_RE.sub("", plain)
    plain = _WHITESPACE_RE.sub(" ", plain).strip()
    if len(plain) > length:
        return plain[:length].rstrip() + "…"
    return plain
