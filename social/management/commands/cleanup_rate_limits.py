from django.core.management.base import BaseCommand

from social.services import RateLimiter
from social.services.rate_limits import DEFAULT_SWEEP_AGE_MS


class Command(BaseCommand):
    """Global sweep of rate-limit window entries, independent of any key."""

    help = 'Deletes rate limit entries older than the given age'

    def add_arguments(self, parser):
        parser.add_argument(
            "--older-than-ms",
            type=int,
            default=DEFAULT_SWEEP_AGE_MS,
            help="Delete entries older than this many milliseconds (default: 24h).",
        )

    def handle(self, *args, **options):
        result = RateLimiter().cleanup_old_entries(older_than_ms=options["older_than_ms"])
        self.stdout.write(self.style.SUCCESS(
            f"Deleted {result['deleted']} rate limit entries older than {result['cutoff'].isoformat()}."
        ))
