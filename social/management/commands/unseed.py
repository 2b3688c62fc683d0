from django.core.management.base import BaseCommand
from django.db import transaction

from social.models import RateWindowEntry, User


class Command(BaseCommand):
    """
    Management command to remove (unseed) user data from the database.

    Deletes all non-staff users. Their follow and block edges and the
    notifications they received go with them through cascading deletes;
    notifications they sent to staff users lose their sender and drop out of
    feeds. Rate limit bookkeeping is cleared as well.
    """

    help = 'Removes seeded sample data'

    def handle(self, *args, **options):
        """Delete non-staff users and all rate limit entries."""
        with transaction.atomic():
            deleted_count, _ = User.objects.filter(is_staff=False).delete()
            RateWindowEntry.objects.all().delete()

        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted_count} non-staff users and related data."))
