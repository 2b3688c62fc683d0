"""Management command to seed the database with sample users, follows, blocks and notifications."""

from random import choice, random, sample

from faker import Faker
from django.core.management.base import BaseCommand
from django.db import IntegrityError, transaction

from social.models import Block, Follow, Notification, User
from social.services import NotificationService

REACTION_TYPES = ["like", "love", "laugh", "wow"]


class Command(BaseCommand):
    """Management command to seed the database with a small social graph."""
    USER_COUNT = 50
    DEFAULT_PASSWORD = 'Password123'
    help = 'Seeds the database with sample data'

    def add_arguments(self, parser):
        parser.add_argument("--users", type=int, default=self.USER_COUNT, help="Number of users to reach.")
        parser.add_argument("--follows", type=int, default=5, help="Follows created per user.")

    def __init__(self, *args, **kwargs):
        """Set up faker instance for generating seed content."""
        super().__init__(*args, **kwargs)
        self.faker = Faker('en_GB')
        self.notifications = NotificationService()

    def handle(self, *args, **options):
        """Run the full seeding sequence."""
        self.create_users(options["users"])
        edges = self.seed_follows(follow_k=options["follows"])
        self.seed_blocks()
        self.seed_notifications(edges)
        self.stdout.write(self.style.SUCCESS("Seeding complete"))

    def create_users(self, target):
        """Create random users until target is reached."""
        while User.objects.count() < target:
            self.generate_user()

    def generate_user(self):
        """Create a single random user; username/email collisions are skipped."""
        first_name = self.faker.first_name()
        last_name = self.faker.last_name()
        username = f"{first_name}{last_name}{self.faker.random_int(1, 999)}".lower()[:30]
        try:
            with transaction.atomic():
                User.objects.create_user(
                    username=username,
                    email=f"{username}@example.org",
                    password=self.DEFAULT_PASSWORD,
                    first_name=first_name,
                    last_name=last_name,
                    bio=self.faker.sentence(nb_words=10),
                    external_id=self.faker.uuid4(),
                )
        except IntegrityError:
            pass

    def seed_follows(self, follow_k: int = 5):
        """Create follow edges for sample users and return the (follower, following) pairs."""
        ids = list(User.objects.values_list("id", flat=True))
        if len(ids) < 2:
            return set()

        k = max(0, min(follow_k, len(ids) - 1))
        edges = set()
        for follower in ids:
            pool = [x for x in ids if x != follower]
            for following in sample(pool, k) if k else []:
                edges.add((follower, following))

        rows = [Follow(follower_id=a, following_id=b) for (a, b) in edges]
        with transaction.atomic():
            Follow.objects.bulk_create(rows, ignore_conflicts=True, batch_size=1000)
        self.stdout.write(f"Seeded {len(rows)} follows")
        return edges

    def seed_blocks(self, ratio: float = 0.02):
        """Add a handful of block edges between users who do not follow each other."""
        ids = list(User.objects.values_list("id", flat=True))
        following = set(Follow.objects.values_list("follower_id", "following_id"))
        rows = [
            Block(blocker_id=a, blocked_id=b)
            for a in ids
            for b in ids
            if a != b and random() < ratio and (b, a) not in following
        ]
        Block.objects.bulk_create(rows, ignore_conflicts=True, batch_size=1000)
        self.stdout.write(f"Seeded {len(rows)} blocks")

    def seed_notifications(self, edges):
        """Fan out follow notifications for seeded edges plus some reactions."""
        users = {user.id: user for user in User.objects.all()}
        created = 0
        for follower_id, following_id in edges:
            if self.notifications.notify_follow(users[following_id], users[follower_id]):
                created += 1
            if random() < 0.3:
                reaction = self.notifications.notify_reaction(
                    users[following_id],
                    users[follower_id],
                    choice([Notification.TARGET_LOG, Notification.TARGET_THREAD]),
                    self.faker.uuid4(),
                    choice(REACTION_TYPES),
                )
                created += 1 if reaction else 0
        self.stdout.write(f"Seeded {created} notifications")
