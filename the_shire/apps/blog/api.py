"""Read-only JSON API over published posts.

Anonymous callers only ever see published posts; signed-in users may ask
for drafts with ``?published=false``.
"""

from __future__ import annotations

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .models import BlogPost
from .repository import get_post, get_post_by_slug, list_posts, search_posts


def serialize_post(post: BlogPost) -> dict:
    return {
        "id": str(post.pk),
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "content": post.content,
        "featuredImage": post.featured_image or None,
        "authorId": post.author.get_username(),
        "published": post.published,
        "tags": list(post.tags or []),
        "createdAt": post.created_at.isoformat(),
        "updatedAt": post.updated_at.isoformat(),
    }


def _parse_published(raw: str | None) -> bool | None:
    if raw is None or raw == "":
        return None
    return raw.lower() in {"1", "true", "yes"}


def _visible(request, post: BlogPost | None) -> bool:
    return post is not None and (post.published or request.user.is_authenticated)


def _not_found() -> JsonResponse:
    return JsonResponse({"error": "Blog post not found"}, status=404)


@require_GET
def post_list(request):
    """GET /api/blog-posts/?published=true|false"""
    published = _parse_published(request.GET.get("published"))
    if not request.user.is_authenticated:
        published = True
    posts = [serialize_post(post) for post in list_posts(published=published)]
    return JsonResponse(posts, safe=False)


@require_GET
def post_detail(request, pk):
    post = get_post(pk)
    if not _visible(request, post):
        return _not_found()
    return JsonResponse(serialize_post(post))


@require_GET
def post_detail_by_slug(request, slug):
    post = get_post_by_slug(slug)
    if not _visible(request, post):
        return _not_found()
    return JsonResponse(serialize_post(post))


@require_GET
def post_search(request, query):
    posts = search_posts(query)
    if not request.user.is_authenticated:
        posts = posts.published()
    return JsonResponse([serialize_post(post) for post in posts], safe=False)
