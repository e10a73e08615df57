"""Public informational pages."""

from django.views.generic import TemplateView

from the_shire.apps.blog.repository import list_posts

RECENT_POST_COUNT = 3


class HomeView(TemplateView):
    """Front page with the latest published posts.

    Visitors who are not signed in get the landing page; signed-in authors
    get the home page with a shortcut into the portal.
    """

    template_name = "home.html"
    landing_template_name = "landing.html"

    def get_template_names(self):
        if not self.request.user.is_authenticated:
            return [self.landing_template_name]
        return [self.template_name]

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["recent_posts"] = list_posts(published=True)[:RECENT_POST_COUNT]
        return context


class AboutView(TemplateView):
    template_name = "about.html"
