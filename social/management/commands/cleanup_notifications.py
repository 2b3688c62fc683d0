from django.conf import settings
from django.core.management.base import BaseCommand

from social.services import NotificationService


class Command(BaseCommand):
    """
    Periodic retention sweep for notifications.

    Deletes notifications older than the retention window for every user, a
    bounded number of batches per run. Anything left over is removed by the
    next scheduled run.
    """

    help = 'Deletes notifications older than the retention window'

    def add_arguments(self, parser):
        parser.add_argument(
            "--days",
            type=int,
            default=settings.SOCIAL_NOTIFICATION_RETENTION_DAYS,
            help="Retention window in days (default: SOCIAL_NOTIFICATION_RETENTION_DAYS).",
        )

    def handle(self, *args, **options):
        result = NotificationService().cleanup_old_notifications(retention_days=options["days"])
        self.stdout.write(self.style.SUCCESS(
            f"Deleted {result['deleted']} notifications created before {result['cutoff'].isoformat()}."
        ))
