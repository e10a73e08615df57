import uuid

import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models

import the_shire.apps.blog.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="BlogPost",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("title", models.CharField(max_length=200)),
                ("slug", models.SlugField(editable=False, max_length=220, unique=True)),
                (
                    "excerpt",
                    models.TextField(blank=True, help_text="Short summary shown in post lists."),
                ),
                ("content", models.TextField(help_text="Markdown body.")),
                ("featured_image", models.URLField(blank=True, max_length=500)),
                ("published", models.BooleanField(default=False)),
                (
                    "tags",
                    models.JSONField(
                        blank=True,
                        default=list,
                        validators=[the_shire.apps.blog.models.validate_tags],
                    ),
                ),
                (
                    "author",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="blog_posts",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["published", "created_at"], name="blog_post_published_idx"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="HistoricalBlogPost",
            fields=[
                ("created_at", models.DateTimeField(blank=True, editable=False)),
                ("updated_at", models.DateTimeField(blank=True, editable=False)),
                ("id", models.UUIDField(db_index=True, default=uuid.uuid4, editable=False)),
                ("title", models.CharField(max_length=200)),
                ("slug", models.SlugField(editable=False, max_length=220)),
                (
                    "excerpt",
                    models.TextField(blank=True, help_text="Short summary shown in post lists."),
                ),
                ("content", models.TextField(help_text="Markdown body.")),
                ("featured_image", models.URLField(blank=True, max_length=500)),
                ("published", models.BooleanField(default=False)),
                (
                    "tags",
                    models.JSONField(
                        blank=True,
                        default=list,
                        validators=[the_shire.apps.blog.models.validate_tags],
                    ),
                ),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "author",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical blog post",
                "verbose_name_plural": "historical blog posts",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
