"""
Management command to install the default venue configuration.

Installs the default service configuration, packages and expense
categories. Rows that already exist are left alone.
"""

from django.core.management.base import BaseCommand

from apps.catalog.services import install_default_catalog
from apps.expenses.services import install_default_categories


class Command(BaseCommand):
    help = 'Install default services, packages and expense categories'

    def handle(self, *args, **options):
        catalog = install_default_catalog()
        categories = install_default_categories()

        self.stdout.write(
            self.style.SUCCESS(
                f"Created {catalog['services']} services, {catalog['packages']} packages "
                f"and {categories} expense categories."
            )
        )
