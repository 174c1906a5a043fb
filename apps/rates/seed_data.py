"""
2024 price/tax table

month: (gasoline, ethanol, diesel unit prices, tax rate %)
The tax rate is shared by the three fuels within a month.
"""
from decimal import Decimal

RATE_TABLE_YEAR = 2024

PURCHASE_2024 = {
    1: ('5.92', '3.38', '5.87', '17.20'),
    2: ('5.95', '3.53', '5.88', '19.30'),
    3: ('5.90', '3.56', '5.84', '18.10'),
    4: ('5.94', '3.63', '5.85', '19.20'),
    5: ('5.93', '3.82', '5.86', '19.70'),
    6: ('5.90', '3.81', '5.83', '20.10'),
    7: ('5.89', '4.09', '5.93', '20.60'),
    8: ('5.99', '4.06', '5.93', '21.10'),
    9: ('6.04', '4.07', '5.91', '21.60'),
    10: ('6.01', '4.03', '5.92', '22.10'),
    11: ('6.03', '4.02', '5.96', '22.60'),
    12: ('6.08', '4.10', '6.01', '23.10'),
}

SALE_2024 = {
    1: ('5.94', '3.40', '5.88', '17.00'),
    2: ('5.97', '3.55', '5.90', '19.00'),
    3: ('5.92', '3.58', '5.86', '18.00'),
    4: ('5.96', '3.65', '5.87', '19.00'),
    5: ('5.95', '3.84', '5.88', '19.50'),
    6: ('5.92', '3.83', '5.85', '20.00'),
    7: ('5.91', '4.11', '5.95', '20.50'),
    8: ('6.01', '4.08', '5.95', '21.00'),
    9: ('6.06', '4.09', '5.93', '21.50'),
    10: ('6.03', '4.05', '5.94', '22.00'),
    11: ('6.05', '4.04', '5.98', '22.50'),
    12: ('6.10', '4.12', '6.03', '23.00'),
}


def iter_rate_rows():
    """Yield one dict per Rate record (72 rows)."""
    for operation_type, table in (('purchase', PURCHASE_2024), ('sale', SALE_2024)):
        for month, (gasoline, ethanol, diesel, tax_rate) in table.items():
            for fuel_type, unit_price in (('gasoline', gasoline), ('ethanol', ethanol), ('diesel', diesel)):
                yield {
                    'month': month,
                    'year': RATE_TABLE_YEAR,
                    'fuel_type': fuel_type,
                    'operation_type': operation_type,
                    'unit_price': Decimal(unit_price),
                    'tax_rate': Decimal(tax_rate),
                }
