from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "the_shire.apps.accounts"
    verbose_name = "Accounts"

    def ready(self):
        from . import signals

        del signals  # imported for side effects (signal registration)
