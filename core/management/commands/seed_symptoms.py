# core/management/commands/seed_symptoms.py
from django.core.management.base import BaseCommand, CommandError

from core.exceptions import AlreadySeeded
from core.services.symptoms import load_symptom_catalog


class Command(BaseCommand):
    help = "Load the reference postpartum symptom catalog into an empty table."

    def handle(self, *args, **opts):
        try:
            count = load_symptom_catalog()
        except AlreadySeeded as e:
            raise CommandError(str(e.detail)) from None
        self.stdout.write(self.style.SUCCESS(f"Seeded {count} symptoms."))
