"""Blog selectors: read-only query composition for the admin portal."""

from the_shire.apps.contact.models import ContactMessage

from .models import BlogPost

RECENT_ACTIVITY_COUNT = 5


def dashboard_stats() -> dict:
    """Counts and recent posts for the portal dashboard.

    Structure:
        {
            'total_posts': int,
            'published_posts': int,
            'draft_posts': int,
            'messages': int,
            'recent_posts': [BlogPost, ...],  # newest first
        }
    """
    total = BlogPost.objects.count()
    published = BlogPost.objects.published().count()
    return {
        "total_posts": total,
        "published_posts": published,
        "draft_posts": total - published,
        "messages": ContactMessage.objects.count(),
        "recent_posts": list(
            BlogPost.objects.select_related("author").newest_first()[:RECENT_ACTIVITY_COUNT]
        ),
    }
