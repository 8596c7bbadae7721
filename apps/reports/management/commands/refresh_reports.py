from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.core.errors import PersistenceError
from apps.reports.services import refresh_user_report


class Command(BaseCommand):
    help = 'Przelicza dzisiejsze raporty dzienne wszystkich użytkowników'

    def add_arguments(self, parser):
        parser.add_argument('--user', type=int, help='Tylko dla użytkownika o tym ID')

    def handle(self, *args, **options):
        today = timezone.localdate()
        users = get_user_model().objects.all()
        if options.get('user'):
            users = users.filter(pk=options['user'])

        refreshed = 0
        for user in users:
            try:
                result = refresh_user_report(user.pk, today)
            except PersistenceError as e:
                self.stderr.write(f"- {user}: {e}")
                continue
            refreshed += 1
            self.stdout.write(f"- {user} ({result.outcome.value})")

        self.stdout.write(self.style.SUCCESS(f'Przeliczono {refreshed} raportów za {today}.'))
