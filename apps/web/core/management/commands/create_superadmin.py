"""
Create the platform super admin, or promote an existing account.

`createsuperuser` only sets Django's staff flags; the API checks the role,
so this command sets both.

Usage:
    python apps/web/manage.py create_superadmin --email admin@example.com \
        --phone 9999999999 --password '...'
"""

import logging
from typing import Any

from django.core.management.base import BaseCommand, CommandError
from django.db import IntegrityError, transaction

from apps.web.core.models import User

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Create or promote the platform super admin"

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument("--email", required=True)
        parser.add_argument("--password", required=True)
        parser.add_argument("--phone", default=None)
        parser.add_argument("--name", default="Super Admin")

    def handle(self, *_args: Any, **options: Any) -> None:
        email = options["email"].strip().lower()
        if len(options["password"]) < 6:
            raise CommandError("Password must be at least 6 characters")

        user = User.objects.filter(email=email).first()
        created = user is None
        if user is None:
            user = User(username=email, email=email, name=options["name"])

        user.role = User.Role.SUPERADMIN
        user.restaurant = None
        user.is_staff = True
        user.is_superuser = True
        if options["phone"]:
            user.phone = options["phone"]
        user.set_password(options["password"])

        try:
            with transaction.atomic():
                user.save()
        except IntegrityError as exc:
            raise CommandError("Email or phone is already in use") from exc

        logger.info("Super admin %s %s", user.pk, "created" if created else "promoted")
        verb = "Created" if created else "Promoted"
        self.stdout.write(self.style.SUCCESS(f"{verb} super admin {email}"))
