"""
Management command to recompute every booking's cached expense total.

Usage:
    python manage.py recompute_booking_expenses [--dry-run]
"""

from django.core.management.base import BaseCommand

from apps.expenses.services import recompute_booking_expenses


class Command(BaseCommand):
    help = 'Recompute the cached expense total of every booking from the expense ledger'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be updated without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        if dry_run:
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))

        changed = recompute_booking_expenses(dry_run=dry_run)

        if not changed:
            self.stdout.write(self.style.SUCCESS("All booking expense totals are up to date."))
            return

        for booking_id, (old_total, new_total) in sorted(changed.items()):
            self.stdout.write(f"  {booking_id}: {old_total} -> {new_total}")

        verb = 'would change' if dry_run else 'updated'
        self.stdout.write(self.style.SUCCESS(f"{len(changed)} booking(s) {verb}."))
