"""Blog views: public reading pages and the admin portal's post management."""

from __future__ import annotations

from django.conf import settings
from django.contrib import messages
from django.core.exceptions import ValidationError
from django.http import Http404
from django.shortcuts import redirect
from django.urls import reverse
from django.views import View
from django.views.generic import FormView, ListView, TemplateView

from the_shire.apps.core.mixins import PortalSectionMixin

from .forms import BlogPostForm
from .repository import (
    create_post,
    delete_post,
    get_post,
    get_post_by_slug,
    list_posts,
    search_posts,
    update_post,
)
from .selectors import dashboard_stats


class PostListView(ListView):
    """Published posts, or published search results when ``q`` is given."""

    template_name = "blog/post_list.html"
    context_object_name = "posts"

    def get_paginate_by(self, queryset):
        return settings.BLOG_POSTS_PER_PAGE

    def get_queryset(self):
        query = self.request.GET.get("q", "").strip()
        self.search_query = query
        self.featured_post = None
        if query:
            return search_posts(query).published()
        posts = list_posts(published=True)
        # The newest post is shown as a feature above the list, not in it.
        self.featured_post = posts.first()
        if self.featured_post is not None:
            posts = posts.exclude(pk=self.featured_post.pk)
        return posts

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["search_query"] = self.search_query
        page = context.get("page_obj")
        on_first_page = page is None or page.number == 1
        context["featured_post"] = self.featured_post if on_first_page else None
        return context


class PostDetailView(TemplateView):
    """A single post by slug. Drafts are only visible to signed-in users."""

    template_name = "blog/post_detail.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        post = get_post_by_slug(self.kwargs["slug"])
        if post is None or (not post.published and not self.request.user.is_authenticated):
            raise Http404("No post found with that slug")
        context["post"] = post
        return context


# ---------------------------------------------------------------------------
# Admin portal
# ---------------------------------------------------------------------------


class PortalDashboardView(PortalSectionMixin, TemplateView):
    template_name = "portal/dashboard.html"
    portal_section = "analytics"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["stats"] = dashboard_stats()
        return context


class PortalPostListView(PortalSectionMixin, ListView):
    """Every post, drafts included, newest first."""

    template_name = "portal/post_list.html"
    context_object_name = "posts"
    portal_section = "posts"
    paginate_by = 25

    def get_queryset(self):
        return list_posts()


class PortalPostCreateView(PortalSectionMixin, FormView):
    """Create a new post as the signed-in user."""

    template_name = "portal/post_form.html"
    form_class = BlogPostForm
    portal_section = "create"

    def form_valid(self, form):
        try:
            post = create_post(author=self.request.user, **form.post_fields())
        except ValidationError as exc:
            form.add_model_errors(exc)
            return self.form_invalid(form)
        messages.success(self.request, f"Chronicle “{post.title}” saved to the archives.")
        return redirect("portal-post-list")


class PortalPostUpdateView(PortalSectionMixin, FormView):
    """Edit an existing post; a new title moves the post to a new slug."""

    template_name = "portal/post_form.html"
    form_class = BlogPostForm
    portal_section = "create"

    def dispatch(self, request, *args, **kwargs):
        if not request.user.is_authenticated:
            return self.handle_no_permission()
        self.post_object = get_post(kwargs["pk"])
        if self.post_object is None:
            raise Http404("No post found with that id")
        return super().dispatch(request, *args, **kwargs)

    def get_initial(self):
        return BlogPostForm.initial_for(self.post_object)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["post"] = self.post_object
        return context

    def form_valid(self, form):
        try:
            post = update_post(self.post_object.pk, **form.post_fields())
        except ValidationError as exc:
            form.add_model_errors(exc)
            return self.form_invalid(form)
        messages.success(self.request, f"Chronicle “{post.title}” updated.")
        return redirect("portal-post-list")


class PortalPostDeleteView(PortalSectionMixin, View):
    """Delete a post (POST only)."""

    http_method_names = ["post"]

    def post(self, request, *args, **kwargs):
        if delete_post(kwargs["pk"]):
            messages.success(request, "The tale has been removed from the archives.")
        else:
            messages.info(request, "That post was already gone.")
        return redirect(reverse("portal-post-list"))
