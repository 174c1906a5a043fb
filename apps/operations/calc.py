"""
Operation valuation and aggregation

- compute_total(): quantity x price x (1 + tax%) x (1 + SELIC%)
- summarize(): statistics over a set of operations
- purchase_sale_difference(): sales minus purchases

All money is Decimal. Sums are accumulated at full precision and each
output field is rounded once (ROUND_HALF_UP, 2 places) when read.
"""
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings

from apps.rates.models import FUEL_TYPES, OPERATION_TYPES

CENT = Decimal('0.01')
HUNDRED = Decimal('100')
ZERO = Decimal('0')


def to_decimal(value):
    """Decimal from int/str/float/Decimal, going through str for floats"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value):
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def get_selic_rate():
    """The fixed SELIC reference rate (percent) from settings"""
    return to_decimal(settings.SELIC_RATE)


def rate_factor(rate):
    """17.20 -> 1.172"""
    return 1 + to_decimal(rate) / HUNDRED


def compute_total(quantity, unit_price, tax_rate, selic_rate=None):
    """
    Total value of an operation.

    Args:
        quantity: litres
        unit_price: price per litre
        tax_rate: tax percentage (17.20 means 17.20%)
        selic_rate: SELIC percentage, defaults to settings.SELIC_RATE

    Returns:
        Decimal rounded half-up to cents (rounded once, at the end)

    Example:
        compute_total(100, '5.92', '17.20', '11.5') == Decimal('773.61')
    """
    if selic_rate is None:
        selic_rate = get_selic_rate()

    total = (
        to_decimal(quantity)
        * to_decimal(unit_price)
        * rate_factor(tax_rate)
        * rate_factor(selic_rate)
    )
    return round_money(total)


def _average(total, count):
    if count == 0:
        return ZERO
    return total / count


def summarize(operations):
    """
    Statistics for an iterable of operations.

    byType and byFuelType always carry every key; byMonth only carries
    months present in the input.
    """
    count = 0
    total_value = ZERO
    total_quantity = ZERO
    by_type = {op_type: ZERO for op_type in OPERATION_TYPES}
    by_fuel_type = {fuel_type: ZERO for fuel_type in FUEL_TYPES}
    by_month = {}

    for operation in operations:
        value = to_decimal(operation.total_value or 0)
        quantity = to_decimal(operation.quantity or 0)

        count += 1
        total_value += value
        total_quantity += quantity
        by_type[operation.type] = by_type.get(operation.type, ZERO) + value
        by_fuel_type[operation.fuel_type] = by_fuel_type.get(operation.fuel_type, ZERO) + value

        month = by_month.setdefault(operation.month, {'value': ZERO, 'quantity': ZERO, 'operations': 0})
        month['value'] += value
        month['quantity'] += quantity
        month['operations'] += 1

    return {
        'totalOperations': count,
        'totalValue': round_money(total_value),
        'totalQuantity': round_money(total_quantity),
        'byType': {key: round_money(value) for key, value in by_type.items()},
        'byFuelType': {key: round_money(value) for key, value in by_fuel_type.items()},
        'byMonth': {
            month: {
                'value': round_money(item['value']),
                'quantity': round_money(item['quantity']),
                'operations': item['operations'],
            }
            for month, item in sorted(by_month.items())
        },
        'averageValue': round_money(_average(total_value, count)),
        'averageQuantity': round_money(_average(total_quantity, count)),
    }


def purchase_sale_difference(operations):
    """
    Sales minus purchases.

    isPositive is True for a zero difference (an empty input included).
    """
    count = 0
    total_purchases = ZERO
    total_sales = ZERO

    for operation in operations:
        count += 1
        value = to_decimal(operation.total_value or 0)
        if operation.type == 'purchase':
            total_purchases += value
        elif operation.type == 'sale':
            total_sales += value

    difference = total_sales - total_purchases

    return {
        'totalPurchases': round_money(total_purchases),
        'totalSales': round_money(total_sales),
        'difference': round_money(difference),
        'isPositive': difference >= 0,
        'operationsCount': count,
    }
