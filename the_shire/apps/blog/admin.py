from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from .models import BlogPost


@admin.register(BlogPost)
class BlogPostAdmin(SimpleHistoryAdmin):
    list_display = ("title", "slug", "author", "published", "created_at", "updated_at")
    list_filter = ("published", "created_at", "updated_at")
    search_fields = ("title", "slug", "excerpt", "content")
    readonly_fields = ("slug", "created_at", "updated_at")
    date_hierarchy = "created_at"

    fieldsets = (
        (None, {"fields": ("title", "slug", "excerpt", "content")}),
        ("Publishing", {"fields": ("author", "published", "tags", "featured_image")}),
        (
            "Metadata",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related("author")
