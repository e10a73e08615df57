"""Insert or update a user from identity provider data."""

from django.core.management.base import BaseCommand, CommandError

from the_shire.apps.accounts.identity import upsert_user


class Command(BaseCommand):
    help = "Insert or update a user keyed by the identity provider's user id"

    def add_arguments(self, parser):
        parser.add_argument("user_id", help="Identity provider subject id")
        parser.add_argument("--email", default="")
        parser.add_argument("--first-name", default="")
        parser.add_argument("--last-name", default="")
        parser.add_argument("--profile-image-url", default="")

    def handle(self, *args, **options):
        try:
            user = upsert_user(
                options["user_id"],
                email=options["email"],
                first_name=options["first_name"],
                last_name=options["last_name"],
                profile_image_url=options["profile_image_url"],
            )
        except ValueError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(self.style.SUCCESS(f"Upserted user {user.get_username()}."))
