from django.db import migrations

from apps.rates.seed_data import RATE_TABLE_YEAR, iter_rate_rows


def seed_rates(apps, schema_editor):
    Rate = apps.get_model('rates', 'Rate')

    for row in iter_rate_rows():
        Rate.objects.get_or_create(
            month=row['month'],
            year=row['year'],
            fuel_type=row['fuel_type'],
            operation_type=row['operation_type'],
            defaults={
                'unit_price': row['unit_price'],
                'tax_rate': row['tax_rate'],
            },
        )


def unseed_rates(apps, schema_editor):
    Rate = apps.get_model('rates', 'Rate')
    Rate.objects.filter(year=RATE_TABLE_YEAR).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('rates', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_rates, unseed_rates),
    ]
