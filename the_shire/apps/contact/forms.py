"""Forms for the public contact page."""

from django import forms

from the_shire.apps.core.forms import StyledFormMixin

from .models import ContactMessage


class ContactForm(StyledFormMixin, forms.ModelForm):
    class Meta:
        model = ContactMessage
        fields = ["name", "email", "subject", "message"]
        widgets = {
            "message": forms.Textarea(attrs={"rows": 6}),
        }
        labels = {
            "subject": "What brings you to the Shire?",
        }
