"""JSON endpoints backing the markdown toolbar editor."""

from __future__ import annotations

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_POST

from the_shire.apps.core.editor import (
    EditorState,
    index_to_utf16_offset,
    insert_markup,
    render_preview,
    utf16_offset_to_index,
)


def _int_param(request, name: str) -> int | None:
    try:
        return int(request.POST.get(name, 0))
    except (TypeError, ValueError):
        return None


@login_required
@require_POST
def editor_apply(request):
    """Apply a toolbar action to the posted buffer and selection.

    Expects POST fields ``text``, ``selection_start``, ``selection_end`` and
    ``action``. Returns the new text and the selection to restore.

    Selection offsets on both sides are UTF-16 code units, as reported by
    ``HTMLTextAreaElement.selectionStart``.
    """
    start = _int_param(request, "selection_start")
    end = _int_param(request, "selection_end")
    if start is None or end is None:
        return JsonResponse({"success": False, "error": "Invalid selection"}, status=400)

    text = request.POST.get("text", "")
    state = EditorState(
        text=text,
        selection_start=utf16_offset_to_index(text, start),
        selection_end=utf16_offset_to_index(text, end),
    )
    try:
        new_state = insert_markup(state, request.POST.get("action", ""))
    except ValueError as exc:
        return JsonResponse({"success": False, "error": str(exc)}, status=400)

    return JsonResponse(
        {
            "success": True,
            "text": new_state.text,
            "selection_start": index_to_utf16_offset(new_state.text, new_state.selection_start),
            "selection_end": index_to_utf16_offset(new_state.text, new_state.selection_end),
        }
    )


@login_required
@require_POST
def editor_preview(request):
    """Render the posted buffer with the preview dialect."""
    return JsonResponse({"success": True, "html": render_preview(request.POST.get("text", ""))})
