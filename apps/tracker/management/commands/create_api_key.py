"""
Management command to generate an API key for a user
"""
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from apps.tracker.models import ApiKey


class Command(BaseCommand):
    help = 'Generate an API key for an existing user'

    def add_arguments(self, parser):
        parser.add_argument('username', type=str, help='Owner of the new key')
        parser.add_argument(
            '--description',
            type=str,
            default='Default API Key',
            help='Key description',
        )

    def handle(self, *args, **options):
        User = get_user_model()
        try:
            user = User.objects.get(username=options['username'])
        except User.DoesNotExist:
            raise CommandError(f"User not found: {options['username']}")

        api_key = ApiKey.objects.create(user=user, description=options['description'])

        self.stdout.write(self.style.SUCCESS(f"API key created for {user.username}:"))
        self.stdout.write(api_key.key)
