"""
Monthly price/tax table

One record per (month, year, fuel type, operation type). Seeded once by
migration and read-only during normal operation; operations copy the
price and tax rate they were valued with.
"""
from django.db import models
from django.core.validators import MaxValueValidator, MinValueValidator

from apps.core.models import TimeStampedModel

FUEL_TYPE_CHOICES = [
    ('gasoline', 'Gasolina'),
    ('ethanol', 'Etanol'),
    ('diesel', 'Diesel'),
]

OPERATION_TYPE_CHOICES = [
    ('purchase', 'Compra'),
    ('sale', 'Venda'),
]

MONTH_CHOICES = [
    (1, 'Janeiro'), (2, 'Fevereiro'), (3, 'Março'), (4, 'Abril'),
    (5, 'Maio'), (6, 'Junho'), (7, 'Julho'), (8, 'Agosto'),
    (9, 'Setembro'), (10, 'Outubro'), (11, 'Novembro'), (12, 'Dezembro'),
]

# chart colours used by the front end
FUEL_TYPE_COLORS = {'gasoline': '#ff9800', 'ethanol': '#8bc34a', 'diesel': '#2196f3'}
OPERATION_TYPE_COLORS = {'purchase': '#f44336', 'sale': '#4caf50'}

FUEL_TYPES = [value for value, _ in FUEL_TYPE_CHOICES]
OPERATION_TYPES = [value for value, _ in OPERATION_TYPE_CHOICES]


class RateQuerySet(models.QuerySet):
    def for_year(self, year): return self.filter(year=year)

    def available_years(self):
        return list(self.order_by('year').values_list('year', flat=True).distinct())

    def apply_filters(self, month=None, year=None, fuel_type=None, operation_type=None):
        qs = self
        if month:
            qs = qs.filter(month=month)
        if year:
            qs = qs.filter(year=year)
        if fuel_type:
            qs = qs.filter(fuel_type=fuel_type)
        if operation_type:
            qs = qs.filter(operation_type=operation_type)
        return qs


class Rate(TimeStampedModel):
    """Unit price and tax rate for one month/fuel/operation type"""

    month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveSmallIntegerField(db_index=True)
    fuel_type = models.CharField(max_length=10, choices=FUEL_TYPE_CHOICES)
    operation_type = models.CharField(max_length=10, choices=OPERATION_TYPE_CHOICES)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    tax_rate = models.DecimalField(max_digits=5, decimal_places=2, help_text='Percentual (17.20 = 17,20%)')

    objects = RateQuerySet.as_manager()

    class Meta:
        db_table = 'rates'
        ordering = ['-year', 'month', 'operation_type', 'fuel_type']
        constraints = [
            models.UniqueConstraint(
                fields=['month', 'year', 'fuel_type', 'operation_type'],
                name='rates_unique_constraint'
            ),
            models.CheckConstraint(
                condition=models.Q(month__gte=1) & models.Q(month__lte=12),
                name='rate_month_range'
            ),
        ]

    def __str__(self):
        return (
            f"{self.get_fuel_type_display()} {self.get_operation_type_display()} "
            f"{self.month:02d}/{self.year}: R$ {self.unit_price} + {self.tax_rate}%"
        )

    def to_dict(self):
        return {
            'id': self.pk,
            'month': self.month,
            'year': self.year,
            'fuelType': self.fuel_type,
            'operationType': self.operation_type,
            'unitPrice': self.unit_price,
            'taxRate': self.tax_rate,
        }
