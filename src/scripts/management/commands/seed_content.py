"""Seed demo users, articles and opinions."""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from articles.models import Article
from opinions.models import Opinion, OpinionType
from users.managers import UserManager

DEMO_EMAIL_DOMAIN = "example.com"
DEMO_PASSWORD = "password123"


def demo_email(index: int) -> str:
    return f"demo{index}@{DEMO_EMAIL_DOMAIN}"


def create_demo_users(count: int) -> list:
    """Create (or reuse) ``count`` demo users sharing ``DEMO_PASSWORD``."""
    User = get_user_model()
    password_hash = UserManager.hash_password(DEMO_PASSWORD)
    users = []
    for index in range(1, count + 1):
        user, _ = User.objects.get_or_create(
            email=demo_email(index),
            defaults={"name": f"Demo User {index}", "password_hash": password_hash},
        )
        users.append(user)
    return users


def create_demo_articles(users, per_user: int) -> list[Article]:
    """Create ``per_user`` articles for every user."""
    articles = []
    for user in users:
        for index in range(1, per_user + 1):
            article, _ = Article.objects.get_or_create(
                title=f"{user.name} article {index}",
                author=user,
                defaults={"content": f"Article {index} written by {user.name}."},
            )
            articles.append(article)
    return articles


def create_demo_opinions(users, articles) -> int:
    """Every user reacts to every article written by someone else."""
    created = 0
    for position, user in enumerate(users):
        for article in articles:
            if article.author_id == user.pk:
                continue
            opinion_type = OpinionType.LIKE if position % 2 == 0 else OpinionType.DISLIKE
            _, was_created = Opinion.objects.get_or_create(
                user=user,
                article=article,
                defaults={"opinion_type": opinion_type},
            )
            created += int(was_created)
    return created


class Command(BaseCommand):
    """Management command to seed demo content."""

    help = (
        "Seed demo users, articles and opinions. "
        "Use --reset to delete previously seeded demo users (and their content) first."
    )

    def add_arguments(self, parser):
        parser.add_argument("--reset", action="store_true", help="Delete demo users before seeding.")
        parser.add_argument("--users", type=int, default=3, help="Number of demo users.")
        parser.add_argument("--articles", type=int, default=2, help="Articles per demo user.")

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        if options.get("reset"):
            self._reset_seeded_data()

        self.stdout.write("Seeding demo content...")
        with transaction.atomic():
            users = create_demo_users(options["users"])
            articles = create_demo_articles(users, options["articles"])
            opinions = create_demo_opinions(users, articles)
        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: {len(users)} users, {len(articles)} articles, {opinions} new opinions. "
                f"Password for every demo user: {DEMO_PASSWORD}"
            )
        )

    def _reset_seeded_data(self) -> None:
        """Remove demo users; their articles, opinions and assets cascade."""
        User = get_user_model()
        deleted, _ = User.objects.filter(email__startswith="demo", email__endswith=f"@{DEMO_EMAIL_DOMAIN}").delete()
        self.stdout.write(self.style.WARNING(f"Seeded demo data cleared ({deleted} rows)."))
