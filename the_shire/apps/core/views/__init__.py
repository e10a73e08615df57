from .editor import editor_apply, editor_preview
from .health import healthz
from .pages import AboutView, HomeView

__all__ = ["AboutView", "HomeView", "editor_apply", "editor_preview", "healthz"]
