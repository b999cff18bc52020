"""Delete every user, article, opinion and asset."""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from articles.models import Article
from assets.models import Asset
from opinions.models import Opinion


class Command(BaseCommand):
    help = "Delete all content rows. Backing files of deleted assets are removed as well."

    def add_arguments(self, parser):
        parser.add_argument("--no-input", action="store_true", help="Do not ask for confirmation.")

    def handle(self, *args, **options):
        if not options.get("no_input"):
            answer = input("This deletes ALL users, articles, opinions and assets. Continue? [y/N] ")
            if answer.strip().lower() != "y":
                self.stdout.write("Aborted.")
                return

        with transaction.atomic():
            # Assets first so every backing file is removed through the delete signal.
            assets, _ = Asset.objects.all().delete()
            opinions, _ = Opinion.objects.all().delete()
            articles, _ = Article.objects.all().delete()
            users, _ = get_user_model().objects.all().delete()

        self.stdout.write(
            self.style.SUCCESS(
                f"Deleted {users} users, {articles} articles, {opinions} opinions and {assets} assets."
            )
        )
