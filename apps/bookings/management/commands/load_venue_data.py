"""
Management command to load a venue data export.

Usage:
    python manage.py load_venue_data export.json

If the file cannot be read or parsed, the error is logged and the
default configuration (services, packages, expense categories) is
installed instead, leaving bookings and expenses empty.
"""

import json
import logging

from django.core.management.base import BaseCommand, CommandError

from apps.bookings.services import load_venue_data, VenueDataError
from apps.catalog.services import install_default_catalog
from apps.expenses.services import install_default_categories

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Load a JSON export of bookings, expenses and configuration'

    def add_arguments(self, parser):
        parser.add_argument('path', help='Path to the JSON export')

    def handle(self, *args, **options):
        path = options['path']

        try:
            with open(path, encoding='utf-8') as handle:
                data = json.load(handle)
        except (OSError, ValueError) as e:
            logger.error("Could not read venue data from %s: %s", path, e)
            self.stdout.write(self.style.WARNING("Falling back to the default configuration."))
            catalog = install_default_catalog()
            categories = install_default_categories()
            self.stdout.write(
                f"Installed {catalog['services']} services, {catalog['packages']} packages "
                f"and {categories} expense categories."
            )
            return

        if not isinstance(data, dict):
            raise CommandError("Export must be a JSON object")

        try:
            counts = load_venue_data(data)
        except VenueDataError as e:
            raise CommandError(str(e))

        for collection, count in counts.items():
            self.stdout.write(f"  {collection}: {count}")
        self.stdout.write(self.style.SUCCESS("Venue data loaded."))
