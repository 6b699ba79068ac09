# core/management/commands/ensure_test_users.py
from django.core.management.base import BaseCommand
from django.contrib.auth.hashers import make_password
from core.models import User

TEST_SET = [
    ("patient1@nurturebloom.test", User.ROLE_PATIENT, "Pat", "Ient"),
    ("pro1@nurturebloom.test", User.ROLE_PROFESSIONAL, "Paula", "Pro"),
    ("admin1@nurturebloom.test", User.ROLE_ADMIN, "Ada", "Min"),
]

class Command(BaseCommand):
    help = "Ensure one test user per role exists with password=123456 (idempotent)."

    def handle(self, *args, **opts):
        for email, role, first, last in TEST_SET:
            u, created = User.objects.get_or_create(
                username=email,
                defaults={
                    "email": email,
                    "role": role,
                    "first_name": first,
                    "last_name": last,
                    "password": make_password("123456"),
                    "is_active": True,
                    "is_staff": role == User.ROLE_ADMIN,
                },
            )
            if not created:
                # reset password, role and active flag
                u.password = make_password("123456")
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"ok: {email} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
