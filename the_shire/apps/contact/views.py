"""Contact page and the portal's message inbox."""

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.shortcuts import redirect
from django.views.generic import FormView, ListView
from ipware import get_client_ip

from the_shire.apps.core.mixins import PortalSectionMixin

from .forms import ContactForm
from .submissions import create_contact_message, list_contact_messages, rate_limit_exceeded


class ContactView(FormView):
    """Public contact form."""

    template_name = "contact/contact_form.html"
    form_class = ContactForm

    def client_ip(self) -> str | None:
        ip, _ = get_client_ip(self.request)
        return ip

    def post(self, request, *args, **kwargs):
        if rate_limit_exceeded(self.client_ip()):
            messages.error(request, "Too many messages sent recently. Please try again later.")
            return redirect("contact")
        return super().post(request, *args, **kwargs)

    def form_valid(self, form):
        try:
            create_contact_message(ip_address=self.client_ip(), **form.cleaned_data)
        except ValidationError as exc:
            form.add_error(None, exc)
            return self.form_invalid(form)
        messages.success(
            self.request,
            "Message sent successfully! Thank you for reaching out. "
            "We'll respond soon from the Shire.",
        )
        return redirect("contact")


class PortalMessageListView(PortalSectionMixin, ListView):
    """Read-only list of contact messages for signed-in admins."""

    template_name = "portal/message_list.html"
    context_object_name = "contact_messages"
    portal_section = "messages"
    paginate_by = 50

    def get_queryset(self):
        return list_contact_messages()
