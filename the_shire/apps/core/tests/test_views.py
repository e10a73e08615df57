"""Tests for public pages, the health check, and the editor endpoints."""

from unittest import mock

from django.contrib.staticfiles import finders
from django.test import TestCase, tag
from django.urls import reverse

from the_shire.apps.core.test_utils import (
    SuppressRequestLogsMixin,
    TestDataMixin,
    create_post,
)


@tag("views")
class HomeViewTests(TestDataMixin, TestCase):
    """Tests for the landing page."""

    def test_shows_three_latest_published_posts(self):
        for index in range(4):
            create_post(title=f"Chronicle {index}", author=self.author)
        create_post(title="Unfinished draft", author=self.author, published=False)

        response = self.client.get(reverse("home"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context["recent_posts"]), 3)
        self.assertNotContains(response, "Unfinished draft")

    def test_empty_state(self):
        response = self.client.get(reverse("home"))

        self.assertContains(response, "No chronicles have been written yet.")

    def test_anonymous_visitors_get_landing_page(self):
        response = self.client.get(reverse("home"))

        self.assertTemplateUsed(response, "landing.html")
        self.assertContains(response, "Adventures from Middle-earth")
        self.assertContains(response, reverse("login"))

    def test_signed_in_users_get_home_page(self):
        create_post(title="Roast Mutton", author=self.author)
        self.client.force_login(self.admin_user)

        response = self.client.get(reverse("home"))

        self.assertTemplateUsed(response, "home.html")
        self.assertContains(response, "Welcome to the Shire")
        self.assertContains(response, "Roast Mutton")


@tag("views")
class AboutViewTests(TestCase):
    def test_renders(self):
        response = self.client.get(reverse("about"))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "About the Shire")


@tag("views")
class HealthCheckTests(SuppressRequestLogsMixin, TestCase):
    """Tests for the /healthz endpoint."""

    def test_ok(self):
        create_post(title="Concerning Hobbits")

        response = self.client.get(reverse("healthz"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Cache-Control"], "no-store")
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["checks"]["db"], "ok")
        self.assertNotEqual(body["checks"]["orm_post_sample"], "none")

    def test_ok_without_posts(self):
        response = self.client.get(reverse("healthz"))

        self.assertEqual(response.json()["checks"]["orm_post_sample"], "none")

    def test_database_failure_returns_503(self):
        with (
            mock.patch(
                "the_shire.apps.core.views.health.check_db_and_orm",
                side_effect=RuntimeError("database is down"),
            ),
            self.assertLogs("the_shire.apps.core.views.health", level="ERROR"),
        ):
            response = self.client.get(reverse("healthz"))

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "error")


@tag("views")
class RequestIdHeaderTests(TestCase):
    def test_response_carries_request_id(self):
        response = self.client.get(reverse("about"))

        self.assertTrue(response["X-Request-ID"])

    def test_incoming_request_id_is_echoed(self):
        response = self.client.get(reverse("about"), HTTP_X_REQUEST_ID="abc123")

        self.assertEqual(response["X-Request-ID"], "abc123")


@tag("views")
class EditorEndpointTests(SuppressRequestLogsMixin, TestDataMixin, TestCase):
    """Tests for the toolbar apply and preview endpoints."""

    def setUp(self):
        super().setUp()
        self.apply_url = reverse("portal-editor-apply")
        self.preview_url = reverse("portal-editor-preview")

    def test_apply_requires_login(self):
        response = self.client.post(self.apply_url, {"action": "bold"})

        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse("login"), response.url)

    def test_apply_rejects_get(self):
        self.client.force_login(self.admin_user)

        response = self.client.get(self.apply_url)

        self.assertEqual(response.status_code, 405)

    def test_apply_wraps_selection(self):
        self.client.force_login(self.admin_user)

        response = self.client.post(
            self.apply_url,
            {
                "text": "the brave hobbit",
                "selection_start": "4",
                "selection_end": "9",
                "action": "bold",
            },
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {
                "success": True,
                "text": "the **brave** hobbit",
                "selection_start": 6,
                "selection_end": 11,
            },
        )

    def test_apply_unknown_action_returns_400(self):
        self.client.force_login(self.admin_user)

        response = self.client.post(self.apply_url, {"text": "x", "action": "blink"})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_apply_invalid_selection_returns_400(self):
        self.client.force_login(self.admin_user)

        response = self.client.post(
            self.apply_url, {"text": "x", "selection_start": "abc", "action": "bold"}
        )

        self.assertEqual(response.status_code, 400)

    def test_preview_renders_dialect(self):
        self.client.force_login(self.admin_user)

        response = self.client.post(self.preview_url, {"text": "**hi**"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["html"], "<strong>hi</strong>")

    def test_preview_requires_login(self):
        response = self.client.post(self.preview_url, {"text": "**hi**"})

        self.assertEqual(response.status_code, 302)

    def test_apply_uses_browser_offsets_around_astral_characters(self):
        """Offsets are UTF-16 code units, so an emoji before the selection counts twice."""
        self.client.force_login(self.admin_user)

        response = self.client.post(
            self.apply_url,
            {
                "text": "🐉 the brave hobbit",
                "selection_start": "7",
                "selection_end": "12",
                "action": "bold",
            },
        )

        self.assertEqual(
            response.json(),
            {
                "success": True,
                "text": "🐉 the **brave** hobbit",
                "selection_start": 9,
                "selection_end": 14,
            },
        )

    def test_apply_placeholder_after_astral_characters(self):
        self.client.force_login(self.admin_user)

        response = self.client.post(
            self.apply_url,
            {"text": "🍄🍄", "selection_start": "4", "selection_end": "4", "action": "italic"},
        )

        body = response.json()
        self.assertEqual(body["text"], "🍄🍄*italic text*")
        self.assertEqual((body["selection_start"], body["selection_end"]), (5, 16))

    def test_chained_actions_build_on_previous_result(self):
        """Feeding one response into the next request keeps both actions."""
        self.client.force_login(self.admin_user)

        first = self.client.post(
            self.apply_url,
            {"text": "", "selection_start": "0", "selection_end": "0", "action": "bold"},
        ).json()
        second = self.client.post(
            self.apply_url,
            {
                "text": first["text"],
                "selection_start": first["selection_start"],
                "selection_end": first["selection_end"],
                "action": "italic",
            },
        ).json()

        self.assertEqual(second["text"], "***bold text***")
        self.assertEqual((second["selection_start"], second["selection_end"]), (3, 12))

    def test_toolbar_script_serializes_requests(self):
        """The toolbar script queues requests instead of firing them concurrently."""
        script = finders.find("js/markdown_toolbar.js")

        with open(script, encoding="utf-8") as handle:
            source = handle.read()

        self.assertIn("enqueue(function ()", source)
        self.assertNotIn("button.addEventListener(\"click\", function () {\n        post(", source)
