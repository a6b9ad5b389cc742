"""
Management command to remove every account registered under the admin email
and create a single fresh admin account.

Usage:
    python manage.py cleanup_admin
"""

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

User = get_user_model()


class Command(BaseCommand):
    help = 'Delete existing admin accounts and create a fresh one'

    def add_arguments(self, parser):
        parser.add_argument('--email', default=settings.ADMIN_EMAIL, help='Admin email address')
        parser.add_argument('--password', default='Admin@123', help='Password for the fresh account')

    @transaction.atomic
    def handle(self, *args, **options):
        email = options['email']

        admins = User.objects.filter(email__iexact=email)
        self.stdout.write(f'Found {admins.count()} {email} accounts')
        for admin in admins:
            self.stdout.write(f'Deleting admin account: {admin.id}')
            # Student profile, enrollments and notifications cascade
            admin.delete()

        admin = User.objects.create_user(
            username=email,
            email=email,
            password=options['password'],
            name='Admin',
            role='admin',
            is_staff=True,
        )
        self.stdout.write(self.style.SUCCESS(f'[OK] Admin account created: {admin.id} ({email})'))
