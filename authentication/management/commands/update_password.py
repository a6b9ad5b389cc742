from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

User = get_user_model()


class Command(BaseCommand):
    help = "Set a user's password"

    def add_arguments(self, parser):
        parser.add_argument('--email', required=True)
        parser.add_argument('--password', required=True)

    def handle(self, *args, **options):
        try:
            user = User.objects.get(email__iexact=options['email'])
        except User.DoesNotExist:
            raise CommandError(f"User with email {options['email']} not found")

        user.set_password(options['password'])
        user.save(update_fields=['password'])
        self.stdout.write(self.style.SUCCESS(f'[OK] Password updated for {user.email}'))
