"""Core form utilities and mixins."""

from django import forms
from django.urls import reverse_lazy

from the_shire.apps.core.editor import TOOLBAR_ACTIONS

# Widget type to CSS class mapping
WIDGET_CSS_CLASSES = {
    forms.TextInput: "form-input",
    forms.EmailInput: "form-input",
    forms.PasswordInput: "form-input",
    forms.URLInput: "form-input",
    forms.Textarea: "form-input form-textarea",
    forms.Select: "form-input",
    forms.CheckboxInput: "checkbox",
}


class MarkdownEditorWidget(forms.Textarea):
    """Textarea with the markdown toolbar and preview toggle.

    The toolbar buttons are rendered from ``TOOLBAR_ACTIONS``; the companion
    script posts the buffer and selection to the editor endpoints, so the
    splice and preview rules live in one place.

    Templates must include the companion script::

        <script src="{% static 'js/markdown_toolbar.js' %}"></script>
    """

    template_name = "core/widgets/markdown_editor.html"

    def __init__(self, attrs=None):
        defaults = {
            "data-markdown-editor": "",
            "data-apply-url": reverse_lazy("portal-editor-apply"),
            "data-preview-url": reverse_lazy("portal-editor-preview"),
            "placeholder": "Write your chronicle here... You can use Markdown formatting.",
        }
        if attrs:
            defaults.update(attrs)
        super().__init__(attrs=defaults)

    def get_context(self, name, value, attrs):
        context = super().get_context(name, value, attrs)
        context["widget"]["toolbar_actions"] = list(TOOLBAR_ACTIONS.values())
        return context


class StyledFormMixin:
    """
    Mixin that adds CSS classes to form widgets automatically.

    Apply to form classes to enable use of {{ field }} in templates
    while maintaining consistent styling.

    Usage:
        class MyForm(StyledFormMixin, forms.Form):
            name = forms.CharField()

    The mixin preserves any existing widget attrs and only adds
    the CSS class if not already present.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._apply_widget_classes()

    def _apply_widget_classes(self):
        for field in self.fields.values():
            widget = field.widget
            for widget_type, css_class in WIDGET_CSS_CLASSES.items():
                if isinstance(widget, widget_type):
                    existing_classes = widget.attrs.get("class", "").split()
                    for cls in css_class.split():
                        if cls not in existing_classes:
                            existing_classes.append(cls)
                    widget.attrs["class"] = " ".join(existing_classes)
                    break
