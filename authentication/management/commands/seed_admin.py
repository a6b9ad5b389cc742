"""
Management command to create (or refresh) the school admin account.

Usage:
    python manage.py seed_admin
    python manage.py seed_admin --email=admin@engconnect.com --password=Secret123
"""

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

User = get_user_model()


class Command(BaseCommand):
    help = 'Create the admin account, or update its password if it already exists'

    def add_arguments(self, parser):
        parser.add_argument('--email', default=settings.ADMIN_EMAIL, help='Admin email address')
        parser.add_argument('--password', default='Admin@123', help='Admin password')
        parser.add_argument('--name', default='Admin', help='Admin display name')

    def handle(self, *args, **options):
        email = options['email']
        self.stdout.write(f'Attempting to seed admin user: {email}')

        user, created = User.objects.get_or_create(
            email=email,
            defaults={'username': email, 'name': options['name'], 'role': 'admin'}
        )
        user.name = options['name']
        user.role = 'admin'
        user.is_staff = True
        user.set_password(options['password'])
        user.save()

        if created:
            self.stdout.write(self.style.SUCCESS(f'[OK] Admin user created: {user.id}'))
        else:
            self.stdout.write(self.style.SUCCESS(f'[OK] Admin user updated: {user.id}'))
