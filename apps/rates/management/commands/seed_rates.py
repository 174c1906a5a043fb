from django.core.management.base import BaseCommand

from apps.rates.models import Rate
from apps.rates.seed_data import iter_rate_rows


class Command(BaseCommand):
    help = 'Load the 2024 price/tax table (idempotent)'

    def handle(self, *args, **kwargs):
        created = 0
        updated = 0
        for row in iter_rate_rows():
            _, created_flag = Rate.objects.update_or_create(
                month=row['month'],
                year=row['year'],
                fuel_type=row['fuel_type'],
                operation_type=row['operation_type'],
                defaults={
                    'unit_price': row['unit_price'],
                    'tax_rate': row['tax_rate'],
                },
            )
            if created_flag:
                created += 1
            else:
                updated += 1

        self.stdout.write(
            self.style.SUCCESS(f'Taxas criadas: {created}, atualizadas: {updated}')
        )
