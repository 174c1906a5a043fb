"""
Operation services

validate -> resolve rate -> compute total -> persist. The preview path
runs the same resolution and valuation without saving, so a preview and
a create for identical input always agree on totalValue.

Callers pass cleaned (snake_case) data from the forms in forms.py.
"""
import logging
import math

from django.core.paginator import EmptyPage, Paginator
from django.db import transaction
from django.utils import timezone

from apps.core.exceptions import RateNotFound, TransactionNotFound, UnsupportedYear
from apps.rates.models import Rate
from .calc import compute_total, get_selic_rate, purchase_sale_difference, summarize
from .models import Operation

logger = logging.getLogger(__name__)

RATE_KEY_FIELDS = ('type', 'fuel_type', 'month', 'year')

# form field -> wire name, for echoing the filters back
FILTER_WIRE_NAMES = {
    'month': 'month',
    'year': 'year',
    'type': 'type',
    'fuel_type': 'fuelType',
    'page': 'page',
    'limit': 'limit',
}


# ============================================================
# Valuation
# ============================================================

def resolve_rate(month, year, fuel_type, operation_type):
    """
    Exact match on (month, year, fuel_type, operation_type).

    Raises:
        UnsupportedYear: the table holds nothing at all for `year`
        RateNotFound: the year is present but this combination is not
    """
    try:
        return Rate.objects.get(
            month=month,
            year=year,
            fuel_type=fuel_type,
            operation_type=operation_type,
        )
    except Rate.DoesNotExist:
        logger.error(f"Taxa não encontrada: month={month} year={year} fuel_type={fuel_type} type={operation_type}")
        if not Rate.objects.for_year(year).exists():
            raise UnsupportedYear(year, Rate.objects.available_years())
        raise RateNotFound(month, year, fuel_type, operation_type)


def value_operation(data):
    """Resolve the rate for cleaned create data and compute the total."""
    rate = resolve_rate(data['month'], data['year'], data['fuel_type'], data['type'])
    selic_rate = get_selic_rate()
    total_value = compute_total(data['quantity'], rate.unit_price, rate.tax_rate, selic_rate)
    return {
        'type': data['type'],
        'fuel_type': data['fuel_type'],
        'quantity': data['quantity'],
        'month': data['month'],
        'year': data['year'],
        'unit_price': rate.unit_price,
        'tax_rate': rate.tax_rate,
        'selic_rate': selic_rate,
        'total_value': total_value,
    }


def calculate_preview(data):
    """Would-be financial fields of an operation, nothing saved"""
    valued = value_operation(data)
    return {
        'quantity': valued['quantity'],
        'unitPrice': valued['unit_price'],
        'taxRate': valued['tax_rate'],
        'selicRate': valued['selic_rate'],
        'totalValue': valued['total_value'],
        'fuelType': valued['fuel_type'],
        'type': valued['type'],
        'month': valued['month'],
        'year': valued['year'],
    }


# ============================================================
# CRUD
# ============================================================

def create_operation(data, user):
    valued = value_operation(data)
    operation = Operation.objects.create(user=user, **valued)
    logger.info(
        f"Operação criada: id={operation.pk} user={user.pk} "
        f"{operation.type}/{operation.fuel_type} total={operation.total_value}"
    )
    return operation


def get_operation(operation_id, user=None, for_update=False):
    """
    Operation by id.

    With a user, an operation owned by somebody else is reported exactly
    like a missing one.
    """
    qs = Operation.objects.all()
    if for_update:
        qs = qs.select_for_update()
    try:
        operation = qs.get(pk=operation_id)
    except Operation.DoesNotExist:
        raise TransactionNotFound(operation_id)

    if user is not None and not operation.is_owner(user):
        logger.warning(f"Acesso negado à operação {operation_id} pelo usuário {user.pk}")
        raise TransactionNotFound(operation_id)
    return operation


@transaction.atomic
def update_operation(operation_id, changes, user):
    """
    Apply a partial update.

    A change to type/fuel_type/month/year re-resolves the rate and takes a
    fresh snapshot (price, tax, SELIC). A quantity-only change recomputes
    the total with the snapshot already stored on the operation.
    """
    operation = get_operation(operation_id, user, for_update=True)

    new_key = {field: changes.get(field, getattr(operation, field)) for field in RATE_KEY_FIELDS}
    key_changed = any(new_key[field] != getattr(operation, field) for field in RATE_KEY_FIELDS)
    quantity = changes.get('quantity', operation.quantity)
    quantity_changed = quantity != operation.quantity

    if not key_changed and not quantity_changed:
        return operation

    if key_changed:
        rate = resolve_rate(new_key['month'], new_key['year'], new_key['fuel_type'], new_key['type'])
        for field, value in new_key.items():
            setattr(operation, field, value)
        operation.unit_price = rate.unit_price
        operation.tax_rate = rate.tax_rate
        operation.selic_rate = get_selic_rate()

    operation.quantity = quantity
    operation.total_value = compute_total(
        operation.quantity, operation.unit_price, operation.tax_rate, operation.selic_rate
    )
    operation.save()
    logger.info(
        f"Operação atualizada: id={operation.pk} "
        f"{'nova taxa' if key_changed else 'mesma taxa'} total={operation.total_value}"
    )
    return operation


def delete_operation(operation_id, user):
    operation = get_operation(operation_id, user)
    operation.delete()
    logger.info(f"Operação removida: id={operation_id} user={user.pk}")


# ============================================================
# Queries and aggregation
# ============================================================

def filtered_operations(filters, user=None):
    """Operations matching filters; user=None is the unscoped (admin) path"""
    qs = Operation.objects.all()
    if user is not None:
        qs = qs.owned_by(user)
    return qs.apply_filters(
        month=filters.get('month'),
        year=filters.get('year'),
        type=filters.get('type'),
        fuel_type=filters.get('fuel_type'),
    )


def paginate(queryset, page, limit):
    paginator = Paginator(queryset, limit)
    try:
        items = list(paginator.page(page).object_list)
    except EmptyPage:
        items = []
    total = paginator.count
    return items, {
        'total': total,
        'page': page,
        'limit': limit,
        'totalPages': math.ceil(total / limit) if total else 0,
    }


def list_operations(filters, page, limit, user=None):
    operations, pagination = paginate(filtered_operations(filters, user), page, limit)
    return {
        'operations': [operation.to_dict() for operation in operations],
        'pagination': pagination,
    }


def get_statistics(filters, user=None):
    return summarize(filtered_operations(filters, user))


def get_purchase_sale_difference(filters, user=None):
    # both types always count towards the difference
    filters = {key: value for key, value in filters.items() if key != 'type'}
    return purchase_sale_difference(filtered_operations(filters, user))


def generate_report(filters, page, limit, user=None):
    """
    Page of operations plus statistics over the filtered set. The
    difference ignores the type filter, matching get_purchase_sale_difference().
    """
    operations = list(filtered_operations(filters, user))
    listing = list_operations(filters, page, limit, user)

    filters_used = {FILTER_WIRE_NAMES[key]: value for key, value in filters.items()}
    filters_used.update({'page': page, 'limit': limit})

    return {
        'operations': listing['operations'],
        'pagination': listing['pagination'],
        'statistics': summarize(operations),
        'purchaseSaleDifference': get_purchase_sale_difference(filters, user),
        'filters': filters_used,
        'generatedAt': timezone.now(),
    }
