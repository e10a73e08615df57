"""Tests for the post repository."""

import uuid
from datetime import timedelta

from django.core.exceptions import ValidationError
from django.test import TestCase, tag
from django.utils import timezone

from the_shire.apps.blog import repository
from the_shire.apps.blog.models import BlogPost
from the_shire.apps.core.test_utils import TestDataMixin, create_post


@tag("models")
class CreatePostTests(TestDataMixin, TestCase):
    def test_creates_post_with_slug_and_id(self):
        post = repository.create_post(
            title="The Hobbit: An Adventure!",
            content="In a hole in the ground there lived a hobbit.",
            author=self.author,
        )

        self.assertIsNotNone(post.pk)
        self.assertEqual(post.slug, "the-hobbit-an-adventure")
        self.assertEqual(BlogPost.objects.get(pk=post.pk).slug, "the-hobbit-an-adventure")

    def test_defaults_to_draft_with_no_tags(self):
        post = repository.create_post(title="Draft", content="...", author=self.author)

        self.assertFalse(post.published)
        self.assertEqual(post.tags, [])
        self.assertIsNotNone(post.created_at)

    def test_stores_optional_fields(self):
        post = repository.create_post(
            title="Maps of the Shire",
            content="Hobbiton, Bywater, Michel Delving.",
            author=self.author,
            excerpt="Where everything is.",
            featured_image="https://example.com/map.png",
            published=True,
            tags=["maps", "shire"],
        )

        post.refresh_from_db()
        self.assertTrue(post.published)
        self.assertEqual(post.tags, ["maps", "shire"])
        self.assertEqual(post.featured_image, "https://example.com/map.png")

    def test_missing_title_raises(self):
        with self.assertRaises(ValidationError) as ctx:
            repository.create_post(title="", content="...", author=self.author)

        self.assertIn("title", ctx.exception.message_dict)
        self.assertEqual(BlogPost.objects.count(), 0)

    def test_missing_content_raises(self):
        with self.assertRaises(ValidationError) as ctx:
            repository.create_post(title="Empty", content="", author=self.author)

        self.assertIn("content", ctx.exception.message_dict)

    def test_missing_author_raises(self):
        with self.assertRaises(ValidationError) as ctx:
            repository.create_post(title="Orphan", content="...", author=None)

        self.assertIn("author", ctx.exception.message_dict)

    def test_malformed_image_url_raises(self):
        with self.assertRaises(ValidationError) as ctx:
            repository.create_post(
                title="Bad image", content="...", author=self.author, featured_image="not a url"
            )

        self.assertIn("featured_image", ctx.exception.message_dict)

    def test_title_without_slug_characters_raises(self):
        with self.assertRaises(ValidationError) as ctx:
            repository.create_post(title="!!!", content="...", author=self.author)

        self.assertIn("title", ctx.exception.message_dict)

    def test_string_tags_are_rejected_not_split(self):
        with self.assertRaises(ValidationError) as ctx:
            repository.create_post(
                title="Tagged", content="...", author=self.author, tags="hobbits"
            )

        self.assertIn("tags", ctx.exception.message_dict)
        self.assertFalse(BlogPost.objects.exists())

    def test_author_that_is_not_a_user_raises_validation_error(self):
        with self.assertRaises(ValidationError) as ctx:
            repository.create_post(title="Impostor", content="...", author="frodo")

        self.assertIn("author", ctx.exception.message_dict)

    def test_title_whose_slug_is_too_long_raises(self):
        """Lower-casing can lengthen a title past the slug column size."""
        title = "\u0130" * 200

        with self.assertRaises(ValidationError) as ctx:
            repository.create_post(title=title, content="...", author=self.author)

        self.assertIn("title", ctx.exception.message_dict)
        self.assertFalse(BlogPost.objects.exists())

    def test_slug_collision_raises(self):
        repository.create_post(title="Second Breakfast", content="...", author=self.author)

        with self.assertRaises(ValidationError) as ctx:
            repository.create_post(title="second breakfast!", content="...", author=self.author)

        self.assertIn("second-breakfast", str(ctx.exception))
        self.assertEqual(BlogPost.objects.count(), 1)


@tag("models")
class UpdatePostTests(TestDataMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.post = create_post(title="Concerning Hobbits", author=self.author, published=False)

    def test_title_change_recomputes_slug(self):
        updated = repository.update_post(self.post.pk, title="Concerning Pipe-weed")

        self.assertEqual(updated.slug, "concerning-pipe-weed")
        self.assertEqual(BlogPost.objects.get(pk=self.post.pk).slug, "concerning-pipe-weed")

    def test_excerpt_change_keeps_slug(self):
        updated = repository.update_post(self.post.pk, excerpt="A short history.")

        self.assertEqual(updated.slug, "concerning-hobbits")
        self.assertEqual(updated.excerpt, "A short history.")

    def test_partial_update_keeps_other_fields(self):
        repository.update_post(self.post.pk, published=True)

        post = BlogPost.objects.get(pk=self.post.pk)
        self.assertTrue(post.published)
        self.assertEqual(post.title, "Concerning Hobbits")
        self.assertEqual(post.content, "A tale of the Shire.")

    def test_refreshes_updated_at(self):
        earlier = timezone.now() - timedelta(days=1)
        BlogPost.objects.filter(pk=self.post.pk).update(updated_at=earlier)

        updated = repository.update_post(self.post.pk, excerpt="New")

        self.assertGreater(updated.updated_at, earlier)

    def test_records_history(self):
        repository.update_post(self.post.pk, title="Concerning Pipe-weed")

        self.assertEqual(self.post.history.count(), 2)

    def test_missing_post_raises_does_not_exist(self):
        with self.assertRaises(BlogPost.DoesNotExist):
            repository.update_post(uuid.uuid4(), title="Nowhere")

    def test_unknown_field_raises(self):
        with self.assertRaises(ValidationError):
            repository.update_post(self.post.pk, slug="hand-picked")

    def test_blank_title_raises(self):
        with self.assertRaises(ValidationError):
            repository.update_post(self.post.pk, title="")

        self.assertEqual(BlogPost.objects.get(pk=self.post.pk).title, "Concerning Hobbits")

    def test_title_colliding_with_another_post_raises(self):
        create_post(title="Riddles in the Dark", author=self.author)

        with self.assertRaises(ValidationError):
            repository.update_post(self.post.pk, title="Riddles in the Dark")

    def test_retitling_to_same_slug_is_allowed(self):
        updated = repository.update_post(self.post.pk, title="Concerning  Hobbits!")

        self.assertEqual(updated.slug, "concerning-hobbits")

    def test_string_tags_are_rejected(self):
        with self.assertRaises(ValidationError):
            repository.update_post(self.post.pk, tags="hobbits")

    def test_author_that_is_not_a_user_raises_validation_error(self):
        with self.assertRaises(ValidationError) as ctx:
            repository.update_post(self.post.pk, author="frodo")

        self.assertIn("author", ctx.exception.message_dict)
        self.assertEqual(BlogPost.objects.get(pk=self.post.pk).author, self.author)

    def test_author_can_be_reassigned(self):
        updated = repository.update_post(self.post.pk, author=self.admin_user)

        self.assertEqual(updated.author, self.admin_user)

    def test_none_tags_become_empty_list(self):
        updated = repository.update_post(self.post.pk, tags=None)

        self.assertEqual(updated.tags, [])


@tag("models")
class DeleteAndLookupTests(TestDataMixin, TestCase):
    def test_delete_then_get_returns_none(self):
        post = create_post(title="Farewell", author=self.author)

        self.assertTrue(repository.delete_post(post.pk))
        self.assertIsNone(repository.get_post(post.pk))

    def test_delete_missing_is_noop(self):
        self.assertFalse(repository.delete_post(uuid.uuid4()))

    def test_delete_malformed_id_is_noop(self):
        self.assertFalse(repository.delete_post("not-a-uuid"))

    def test_get_post(self):
        post = create_post(title="Found", author=self.author)

        self.assertEqual(repository.get_post(post.pk), post)
        self.assertEqual(repository.get_post(str(post.pk)), post)

    def test_get_post_malformed_id_returns_none(self):
        self.assertIsNone(repository.get_post("not-a-uuid"))

    def test_get_post_by_slug(self):
        post = create_post(title="There and Back Again", author=self.author)

        self.assertEqual(repository.get_post_by_slug("there-and-back-again"), post)
        self.assertIsNone(repository.get_post_by_slug("missing"))


@tag("models")
class ListAndSearchTests(TestDataMixin, TestCase):
    def setUp(self):
        super().setUp()
        now = timezone.now()
        self.oldest = create_post(
            title="The Shire Reckoning",
            content="Calendars.",
            author=self.author,
            created_at=now - timedelta(days=3),
        )
        self.middle = create_post(
            title="Pipe-weed",
            content="Grown in the Southfarthing.",
            excerpt="Longbottom Leaf from the SHIRE.",
            author=self.author,
            published=False,
            created_at=now - timedelta(days=2),
        )
        self.newest = create_post(
            title="Mushrooms",
            content="Farmer Maggot guards them jealously in the shire.",
            author=self.author,
            created_at=now - timedelta(days=1),
        )
        self.unrelated = create_post(
            title="Rivendell",
            content="Elves.",
            author=self.author,
            created_at=now - timedelta(days=4),
        )

    def test_list_newest_first(self):
        self.assertEqual(
            list(repository.list_posts()),
            [self.newest, self.middle, self.oldest, self.unrelated],
        )

    def test_list_published_filter(self):
        self.assertEqual(
            list(repository.list_posts(published=True)),
            [self.newest, self.oldest, self.unrelated],
        )
        self.assertEqual(list(repository.list_posts(published=False)), [self.middle])

    def test_search_matches_title_content_or_excerpt(self):
        """Matches are case-insensitive, across all three fields, newest first."""
        self.assertEqual(
            list(repository.search_posts("shire")),
            [self.newest, self.middle, self.oldest],
        )

    def test_search_blank_returns_empty(self):
        self.assertEqual(list(repository.search_posts("")), [])
        self.assertEqual(list(repository.search_posts("   ")), [])

    def test_search_no_match(self):
        self.assertEqual(list(repository.search_posts("mordor")), [])
