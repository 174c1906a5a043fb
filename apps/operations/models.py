from decimal import Decimal
import logging

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.core.models import UserOwnedModel
from apps.rates.models import FUEL_TYPE_CHOICES, OPERATION_TYPE_CHOICES

logger = logging.getLogger(__name__)

MAX_QUANTITY = Decimal('1000000')


def default_year():
    return settings.FUEL_DEFAULT_YEAR


class OperationQuerySet(models.QuerySet):
    """Operation helpers (filters used by list/statistics/report)"""
    def owned_by(self, user): return self.filter(user=user)

    def apply_filters(self, month=None, year=None, type=None, fuel_type=None):
        qs = self
        if month:
            qs = qs.filter(month=month)
        if year:
            qs = qs.filter(year=year)
        if type:
            qs = qs.filter(type=type)
        if fuel_type:
            qs = qs.filter(fuel_type=fuel_type)
        return qs


class Operation(UserOwnedModel):
    """
    Fuel purchase or sale

    unit_price, tax_rate and selic_rate are a snapshot of the values the
    operation was valued with; later changes to the rate table do not
    touch existing operations.
    """

    type = models.CharField(max_length=10, choices=OPERATION_TYPE_CHOICES, db_index=True)
    fuel_type = models.CharField(max_length=10, choices=FUEL_TYPE_CHOICES, db_index=True)
    quantity = models.DecimalField(
        max_digits=10, decimal_places=3,
        validators=[MinValueValidator(Decimal('0.001')), MaxValueValidator(MAX_QUANTITY)]
    )
    month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveSmallIntegerField(default=default_year)

    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    tax_rate = models.DecimalField(max_digits=5, decimal_places=2)
    selic_rate = models.DecimalField(max_digits=5, decimal_places=2)
    total_value = models.DecimalField(max_digits=15, decimal_places=2)

    objects = OperationQuerySet.as_manager()

    class Meta:
        db_table = 'operations'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='operations_user_created_idx'),
            models.Index(fields=['type', 'fuel_type'], name='operations_type_fuel_idx'),
            models.Index(fields=['month', 'year'], name='operations_month_year_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(quantity__gt=0), name='operation_quantity_positive'),
            models.CheckConstraint(
                condition=models.Q(month__gte=1) & models.Q(month__lte=12),
                name='operation_month_range'
            ),
        ]

    def __str__(self):
        return (
            f"{self.get_type_display()} {self.get_fuel_type_display()} "
            f"{self.quantity} L ({self.month:02d}/{self.year})"
        )

    def to_dict(self):
        return {
            'id': self.pk,
            'type': self.type,
            'fuelType': self.fuel_type,
            'quantity': self.quantity,
            'month': self.month,
            'year': self.year,
            'unitPrice': self.unit_price,
            'taxRate': self.tax_rate,
            'selicRate': self.selic_rate,
            'totalValue': self.total_value,
            'userId': self.user_id,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }
