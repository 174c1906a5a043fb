from decimal import Decimal, ROUND_HALF_UP
from io import BytesIO

import openpyxl
from openpyxl.styles import Font

from apps.rates.models import FUEL_TYPE_CHOICES, MONTH_CHOICES, OPERATION_TYPE_CHOICES
from .calc import to_decimal

MONTH_NAMES = dict(MONTH_CHOICES)
FUEL_TYPE_NAMES = dict(FUEL_TYPE_CHOICES)
OPERATION_TYPE_NAMES = dict(OPERATION_TYPE_CHOICES)


def _group_thousands(value, places):
    """Decimal -> '1.234,50' (pt-BR separators)"""
    quantized = to_decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    text = f'{quantized:,.{places}f}'
    return text.replace(',', '_').replace('.', ',').replace('_', '.')


def format_currency(value):
    """1234.5 -> 'R$ 1.234,50'"""
    text = _group_thousands(value, 2)
    if text.startswith('-'):
        return f'-R$ {text[1:]}'
    return f'R$ {text}'


def format_quantity(value):
    """1234.5 -> '1.234,500 L'"""
    return f'{_group_thousands(value, 3)} L'


def month_name(month):
    return MONTH_NAMES.get(month, 'Mês inválido')


def fuel_type_name(fuel_type):
    return FUEL_TYPE_NAMES.get(fuel_type, fuel_type)


def operation_type_name(operation_type):
    return OPERATION_TYPE_NAMES.get(operation_type, operation_type)


def export_operations_to_excel(operations, statistics, difference):
    """
    Report workbook: one row per operation plus a summary sheet.
    Money stays numeric (float) so the spreadsheet can sum it.
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Operações"

    headers = ['ID', 'Tipo', 'Combustível', 'Quantidade (L)', 'Mês', 'Ano',
               'Preço unitário', 'Imposto (%)', 'SELIC (%)', 'Valor total', 'Criado em']
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for op in operations:
        created_at = op.created_at.strftime('%Y-%m-%d %H:%M') if op.created_at else ''
        ws.append([
            op.pk,
            operation_type_name(op.type),
            fuel_type_name(op.fuel_type),
            float(op.quantity),
            month_name(op.month),
            op.year,
            float(op.unit_price),
            float(op.tax_rate),
            float(op.selic_rate),
            float(op.total_value),
            created_at,
        ])

    summary = wb.create_sheet("Resumo")
    rows = [
        ('Total de operações', statistics['totalOperations']),
        ('Valor total', float(statistics['totalValue'])),
        ('Quantidade total (L)', float(statistics['totalQuantity'])),
        ('Valor médio', float(statistics['averageValue'])),
        ('Quantidade média (L)', float(statistics['averageQuantity'])),
        ('Total de compras', float(difference['totalPurchases'])),
        ('Total de vendas', float(difference['totalSales'])),
        ('Diferença (vendas - compras)', float(difference['difference'])),
    ]
    for label, value in rows:
        summary.append([label, value])
    for row in summary.iter_rows(max_col=1):
        row[0].font = Font(bold=True)

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output
