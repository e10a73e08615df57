"""Toolbar-driven markdown editing and the lightweight preview dialect.

The editor works on an :class:`EditorState`: the full text buffer plus the
current selection bounds. Each toolbar action wraps the selection (or a
placeholder when nothing is selected) in action-specific markup and
re-selects the wrapped span so the author can type straight over a
placeholder.

The preview renderer understands a deliberately small dialect and applies
its rules as an ordered series of substitutions. It is not CommonMark; posts
are rendered for readers with :func:`the_shire.apps.core.markdown.render_markdown_html`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

import nh3

from the_shire.apps.core.markdown import ALLOWED_ATTRIBUTES, ALLOWED_TAGS


@dataclass(frozen=True)
class ToolbarAction:
    """A toolbar button: the markup wrapped around the selection."""

    name: str
    label: str
    prefix: str
    suffix: str
    placeholder: str


TOOLBAR_ACTIONS: dict[str, ToolbarAction] = {
    action.name: action
    for action in (
        ToolbarAction("bold", "Bold", "**", "**", "bold text"),
        ToolbarAction("italic", "Italic", "*", "*", "italic text"),
        ToolbarAction("heading", "Heading", "## ", "", "heading"),
        ToolbarAction("quote", "Quote", "> ", "", "quote"),
        ToolbarAction("list", "List", "- ", "", "list item"),
        ToolbarAction("link", "Link", "[", "](url)", "link text"),
        ToolbarAction("image", "Image", "![", "](image-url)", "alt text"),
    )
}


@dataclass(frozen=True)
class EditorState:
    """Text buffer, selection bounds, and whether the preview is showing."""

    text: str = ""
    selection_start: int = 0
    selection_end: int = 0
    preview_mode: bool = False

    @property
    def selected_text(self) -> str:
        start, end = self.bounds()
        return self.text[start:end]

    def bounds(self) -> tuple[int, int]:
        """Return the selection as an ordered ``(start, end)`` pair within the buffer."""
        length = len(self.text)
        start = min(max(self.selection_start, 0), length)
        end = min(max(self.selection_end, 0), length)
        if end < start:
            start, end = end, start
        return start, end


def get_action(name: str) -> ToolbarAction:
    try:
        return TOOLBAR_ACTIONS[name]
    except KeyError:
        raise ValueError(f"Unknown toolbar action: {name!r}") from None


def insert_markup(state: EditorState, action: ToolbarAction | str) -> EditorState:
    """Wrap the current selection with ``action``'s markup.

    An empty selection is replaced by the action's placeholder. Text outside
    the selection is preserved exactly. The returned state selects the
    wrapped text (or placeholder), not the markup around it.

    Args:
        state: Current buffer and selection.
        action: A :class:`ToolbarAction` or the name of one in ``TOOLBAR_ACTIONS``.

    Returns:
        A new :class:`EditorState`; ``state`` is not modified.

    Raises:
        ValueError: If ``action`` names an unknown toolbar action.
    """
    if isinstance(action, str):
        action = get_action(action)

    start, end = state.bounds()
    chosen = state.text[start:end] or action.placeholder
    new_text = state.text[:start] + action.prefix + chosen + action.suffix + state.text[end:]

    new_start = start + len(action.prefix)
    return replace(
        state,
        text=new_text,
        selection_start=new_start,
        selection_end=new_start + len(chosen),
    )


def toggle_preview(state: EditorState) -> EditorState:
    return replace(state, preview_mode=not state.preview_mode)


# Browsers report textarea selections in UTF-16 code units; Python indexes
# strings by code point. Characters outside the BMP take two code units.
def _utf16_width(char: str) -> int:
    return 2 if ord(char) > 0xFFFF else 1


def utf16_offset_to_index(text: str, offset: int) -> int:
    """Convert a browser (UTF-16) offset into ``text`` to a ``str`` index.

    An offset that falls inside a surrogate pair moves to the next character.
    """
    units = 0
    for index, char in enumerate(text):
        if units >= offset:
            return index
        units += _utf16_width(char)
    return len(text)


def index_to_utf16_offset(text: str, index: int) -> int:
    return sum(_utf16_width(char) for char in text[: max(index, 0)])


# Order matters: each rule runs once over the output of the rules before it.
# Links skip a "[" preceded by "!" so the image rule still sees image markup.
PREVIEW_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\*\*(.*?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.*?)\*"), r"<em>\1</em>"),
    (re.compile(r"^## (.*)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^### (.*)$", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^> (.*)$", re.MULTILINE), r"<blockquote>\1</blockquote>"),
    (re.compile(r"(?<!!)\[([^\]]+)\]\(([^)]+)\)"), r'<a href="\2">\1</a>'),
    (re.compile(r"!\[([^\]]*)\]\(([^)]+)\)"), r'<img src="\2" alt="\1" />'),
    (re.compile(r"^- (.*)$", re.MULTILINE), "<li>\u2022 \\1</li>"),
    (re.compile(r"\n"), "<br/>"),
)


def render_preview(text: str | None, sanitize: bool = True) -> str:
    """Render the preview dialect to HTML.

    No escaping happens before substitution, so raw HTML in ``text`` passes
    through the rules untouched. With ``sanitize`` (the default) the result
    is then cleaned with nh3 using the same allow-list as published posts;
    ``sanitize=False`` returns the raw substitution output.
    """
    if not text:
        return ""
    html = text
    for pattern, replacement in PREVIEW_RULES:
        html = pattern.sub(replacement, html)
    if sanitize:
        html = nh3.clean(html, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES)
    return html
