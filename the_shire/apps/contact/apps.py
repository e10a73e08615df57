from django.apps import AppConfig


class ContactConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "the_shire.apps.contact"
    verbose_name = "Contact"
