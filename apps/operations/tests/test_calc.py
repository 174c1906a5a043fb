from decimal import Decimal
from types import SimpleNamespace

import pytest

from apps.operations.calc import (
    compute_total,
    get_selic_rate,
    purchase_sale_difference,
    rate_factor,
    round_money,
    summarize,
)


def op(type, fuel_type, total_value, quantity='10', month=1):
    return SimpleNamespace(
        type=type, fuel_type=fuel_type, month=month,
        total_value=Decimal(total_value), quantity=Decimal(quantity),
    )


class TestComputeTotal:
    def test_january_gasoline_purchase(self):
        """100 L x 5.92 x 1.172 x 1.115 = 773.61376"""
        assert compute_total(100, '5.92', '17.20', '11.5') == Decimal('773.61')

    def test_uses_configured_selic_by_default(self):
        assert get_selic_rate() == Decimal('11.5')
        assert compute_total(100, '5.92', '17.20') == Decimal('773.61')

    def test_float_inputs_go_through_str(self):
        assert compute_total(100.0, 5.92, 17.2, 11.5) == Decimal('773.61')

    def test_rounds_half_up_once(self):
        # 1 x 1.005 x 1 x 1 -> 1.005 -> 1.01 (half-up, not banker's)
        assert compute_total(1, '1.005', '0', '0') == Decimal('1.01')

    def test_zero_rates_is_quantity_times_price(self):
        assert compute_total('2.5', '4.00', 0, 0) == Decimal('10.00')

    def test_scales_linearly_with_quantity(self):
        single = compute_total(1, '6.08', '23.10', '11.5')
        thousand = compute_total(1000, '6.08', '23.10', '11.5')
        assert abs(thousand - single * 1000) <= Decimal('10')

    def test_result_has_two_places(self):
        assert compute_total('0.001', '3.38', '17.20', '11.5').as_tuple().exponent == -2


def test_rate_factor():
    assert rate_factor('17.20') == Decimal('1.172')
    assert rate_factor(0) == Decimal('1')


def test_round_money_half_up():
    assert round_money('2.675') == Decimal('2.68')
    assert round_money('-2.675') == Decimal('-2.68')


class TestSummarize:
    def test_empty_input(self):
        stats = summarize([])
        assert stats['totalOperations'] == 0
        assert stats['totalValue'] == Decimal('0.00')
        assert stats['averageValue'] == Decimal('0.00')
        assert stats['averageQuantity'] == Decimal('0.00')
        assert stats['byType'] == {'purchase': Decimal('0.00'), 'sale': Decimal('0.00')}
        assert set(stats['byFuelType']) == {'gasoline', 'ethanol', 'diesel'}
        assert stats['byMonth'] == {}

    def test_totals_and_breakdowns(self):
        operations = [
            op('purchase', 'gasoline', '100.00', quantity='10', month=1),
            op('sale', 'gasoline', '150.00', quantity='10', month=1),
            op('sale', 'diesel', '50.50', quantity='5.5', month=3),
        ]
        stats = summarize(operations)

        assert stats['totalOperations'] == 3
        assert stats['totalValue'] == Decimal('300.50')
        assert stats['totalQuantity'] == Decimal('25.50')
        assert stats['byType'] == {'purchase': Decimal('100.00'), 'sale': Decimal('200.50')}
        assert stats['byFuelType'] == {
            'gasoline': Decimal('250.00'),
            'ethanol': Decimal('0.00'),
            'diesel': Decimal('50.50'),
        }
        assert list(stats['byMonth']) == [1, 3]
        assert stats['byMonth'][1] == {'value': Decimal('250.00'), 'quantity': Decimal('20.00'), 'operations': 2}
        assert stats['byMonth'][3]['operations'] == 1
        assert stats['averageValue'] == Decimal('100.17')
        assert stats['averageQuantity'] == Decimal('8.50')

    def test_breakdowns_sum_to_total(self):
        operations = [
            op('purchase', 'ethanol', '33.33', month=2),
            op('purchase', 'diesel', '33.33', month=5),
            op('sale', 'gasoline', '33.34', month=2),
        ]
        stats = summarize(operations)
        assert sum(stats['byType'].values()) == stats['totalValue']
        assert sum(stats['byFuelType'].values()) == stats['totalValue']
        assert sum(item['value'] for item in stats['byMonth'].values()) == stats['totalValue']
        assert sum(item['operations'] for item in stats['byMonth'].values()) == stats['totalOperations']

    def test_months_are_sorted(self):
        stats = summarize([op('sale', 'diesel', '1', month=m) for m in (12, 2, 7)])
        assert list(stats['byMonth']) == [2, 7, 12]


class TestPurchaseSaleDifference:
    def test_sales_minus_purchases(self):
        result = purchase_sale_difference([
            op('purchase', 'gasoline', '773.61'),
            op('sale', 'gasoline', '774.90'),
        ])
        assert result == {
            'totalPurchases': Decimal('773.61'),
            'totalSales': Decimal('774.90'),
            'difference': Decimal('1.29'),
            'isPositive': True,
            'operationsCount': 2,
        }

    def test_negative_difference(self):
        result = purchase_sale_difference([op('purchase', 'diesel', '10.00'), op('sale', 'diesel', '4.00')])
        assert result['difference'] == Decimal('-6.00')
        assert result['isPositive'] is False

    def test_empty_is_positive(self):
        result = purchase_sale_difference([])
        assert result['difference'] == Decimal('0.00')
        assert result['isPositive'] is True
        assert result['operationsCount'] == 0

    @pytest.mark.parametrize('purchases,sales', [(['1.10', '2.20'], ['5.00']), ([], ['0.01']), (['9.99'], [])])
    def test_difference_matches_totals(self, purchases, sales):
        operations = [op('purchase', 'ethanol', v) for v in purchases] + [op('sale', 'ethanol', v) for v in sales]
        result = purchase_sale_difference(operations)
        assert result['difference'] == result['totalSales'] - result['totalPurchases']
        assert result['isPositive'] == (result['difference'] >= 0)


@pytest.mark.parametrize('quantity,unit_price', [(0, '5.92'), ('0', '6.08'), (100, 0), ('250.5', '0.00')])
def test_zero_quantity_or_price_is_zero(quantity, unit_price):
    assert compute_total(quantity, unit_price, '17.20', '11.5') == Decimal('0.00')


BASE_ARGS = {'quantity': '100', 'unit_price': '5.92', 'tax_rate': '17.20', 'selic_rate': '11.5'}


@pytest.mark.parametrize('field,values', [
    ('quantity', ['0.001', '1', '99.999', '100', '1000000']),
    ('unit_price', ['0', '3.38', '5.92', '5.93', '6.10']),
    ('tax_rate', ['0', '17.00', '17.20', '23.10', '100']),
    ('selic_rate', ['0', '10', '11.5', '13.75', '50']),
])
def test_total_never_decreases_when_an_input_grows(field, values):
    totals = [compute_total(**{**BASE_ARGS, field: value}) for value in values]
    assert totals == sorted(totals)


@pytest.mark.parametrize('values', [
    [('purchase', '773.61'), ('sale', '774.90')],
    [('purchase', '10.01'), ('purchase', '0.02'), ('sale', '3.33')],
    [('sale', '1.11'), ('sale', '2.22')],
    [],
])
def test_difference_agrees_with_type_breakdown(values):
    operations = [op(type, 'diesel', value) for type, value in values]
    by_type = summarize(operations)['byType']
    assert purchase_sale_difference(operations)['difference'] == by_type['sale'] - by_type['purchase']
