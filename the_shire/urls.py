from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import path

from the_shire.apps.blog import api as blog_api
from the_shire.apps.blog.views import (
    PortalDashboardView,
    PortalPostCreateView,
    PortalPostDeleteView,
    PortalPostListView,
    PortalPostUpdateView,
    PostDetailView,
    PostListView,
)
from the_shire.apps.contact.views import ContactView, PortalMessageListView
from the_shire.apps.core.views import AboutView, HomeView, editor_apply, editor_preview, healthz

urlpatterns = [
    #
    # Home, static pages, and health check
    #
    path("", HomeView.as_view(), name="home"),  # Landing page
    path("about/", AboutView.as_view(), name="about"),  # About the Shire
    path("healthz", healthz, name="healthz"),  # Health check
    #
    # Django admin
    #
    path("admin/", admin.site.urls),
    #
    # Authentication
    #
    path(
        "login/",
        auth_views.LoginView.as_view(template_name="registration/login.html"),
        name="login",
    ),
    path("logout/", auth_views.LogoutView.as_view(), name="logout"),
    #
    # Public blog
    #
    path("blog/", PostListView.as_view(), name="post-list"),  # Published posts + search
    path("blog/<slug:slug>/", PostDetailView.as_view(), name="post-detail"),  # Single post
    #
    # Contact
    #
    path("contact/", ContactView.as_view(), name="contact"),
    #
    # JSON API (read-only)
    #
    path("api/blog-posts/", blog_api.post_list, name="api-post-list"),
    path(
        "api/blog-posts/search/<str:query>/", blog_api.post_search, name="api-post-search"
    ),
    path(
        "api/blog-posts/slug/<slug:slug>/",
        blog_api.post_detail_by_slug,
        name="api-post-detail-by-slug",
    ),
    path("api/blog-posts/<uuid:pk>/", blog_api.post_detail, name="api-post-detail"),
    #
    # Admin portal (login required)
    #
    path("portal/", PortalDashboardView.as_view(), name="portal-dashboard"),
    path("portal/posts/", PortalPostListView.as_view(), name="portal-post-list"),
    path("portal/posts/new/", PortalPostCreateView.as_view(), name="portal-post-create"),
    path(
        "portal/posts/<uuid:pk>/edit/", PortalPostUpdateView.as_view(), name="portal-post-edit"
    ),
    path(
        "portal/posts/<uuid:pk>/delete/",
        PortalPostDeleteView.as_view(),
        name="portal-post-delete",
    ),
    path("portal/messages/", PortalMessageListView.as_view(), name="portal-message-list"),
    path("portal/editor/apply/", editor_apply, name="portal-editor-apply"),
    path("portal/editor/preview/", editor_preview, name="portal-editor-preview"),
]
