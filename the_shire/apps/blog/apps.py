from django.apps import AppConfig


class BlogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "the_shire.apps.blog"
    verbose_name = "Blog"
