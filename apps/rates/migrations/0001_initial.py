import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Rate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('month', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)])),
                ('year', models.PositiveSmallIntegerField(db_index=True)),
                ('fuel_type', models.CharField(choices=[('gasoline', 'Gasolina'), ('ethanol', 'Etanol'), ('diesel', 'Diesel')], max_length=10)),
                ('operation_type', models.CharField(choices=[('purchase', 'Compra'), ('sale', 'Venda')], max_length=10)),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=10)),
                ('tax_rate', models.DecimalField(decimal_places=2, help_text='Percentual (17.20 = 17,20%)', max_digits=5)),
            ],
            options={
                'db_table': 'rates',
                'ordering': ['-year', 'month', 'operation_type', 'fuel_type'],
                'constraints': [
                    models.UniqueConstraint(fields=('month', 'year', 'fuel_type', 'operation_type'), name='rates_unique_constraint'),
                    models.CheckConstraint(condition=models.Q(('month__gte', 1), ('month__lte', 12)), name='rate_month_range'),
                ],
            },
        ),
    ]
