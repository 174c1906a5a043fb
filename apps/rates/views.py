"""
Reference data for the front end: select options and the rate table.
"""
import logging

from django.utils import timezone
from django.views.decorators.http import require_GET

from apps.core.exceptions import InvalidInput
from apps.core.http import api_response
from .models import (
    FUEL_TYPE_CHOICES,
    FUEL_TYPE_COLORS,
    MONTH_CHOICES,
    OPERATION_TYPE_CHOICES,
    OPERATION_TYPE_COLORS,
    FUEL_TYPES,
    OPERATION_TYPES,
    Rate,
)

logger = logging.getLogger(__name__)


def _fuel_types():
    return [
        {'value': value, 'label': label, 'color': FUEL_TYPE_COLORS[value]}
        for value, label in FUEL_TYPE_CHOICES
    ]


def _operation_types():
    return [
        {'value': value, 'label': label, 'color': OPERATION_TYPE_COLORS[value]}
        for value, label in OPERATION_TYPE_CHOICES
    ]


def _months():
    return [{'value': value, 'label': label} for value, label in MONTH_CHOICES]


def _years():
    """Two years back through next year, flagged when rates exist"""
    current_year = timezone.now().year
    seeded = set(Rate.objects.available_years())
    return [
        {'value': year, 'label': str(year), 'hasData': year in seeded}
        for year in range(current_year - 2, current_year + 2)
    ]


@require_GET
def fuel_types(request):
    return api_response({'message': 'Tipos de combustível obtidos com sucesso', 'data': _fuel_types()})


@require_GET
def operation_types(request):
    return api_response({'message': 'Tipos de operação obtidos com sucesso', 'data': _operation_types()})


@require_GET
def months(request):
    return api_response({'message': 'Meses obtidos com sucesso', 'data': _months()})


@require_GET
def years(request):
    return api_response({'message': 'Anos obtidos com sucesso', 'data': _years()})


@require_GET
def all_config(request):
    return api_response({
        'message': 'Configurações obtidas com sucesso',
        'data': {
            'fuelTypes': _fuel_types(),
            'operationTypes': _operation_types(),
            'months': _months(),
            'years': _years(),
        },
    })


def _int_param(request, name, errors):
    raw = request.GET.get(name)
    if raw in (None, ''):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        errors[name] = [f'{name} deve ser um número inteiro']
        return None


@require_GET
def rate_list(request):
    """Rate table with optional month/year/fuelType/operationType filters"""
    errors = {}
    month = _int_param(request, 'month', errors)
    year = _int_param(request, 'year', errors)

    fuel_type = request.GET.get('fuelType') or None
    if fuel_type and fuel_type not in FUEL_TYPES:
        errors['fuelType'] = ['Tipo de combustível deve ser "gasoline", "ethanol" ou "diesel"']

    operation_type = request.GET.get('operationType') or None
    if operation_type and operation_type not in OPERATION_TYPES:
        errors['operationType'] = ['Tipo deve ser "purchase" ou "sale"']

    if errors:
        raise InvalidInput(errors)

    rates = Rate.objects.apply_filters(
        month=month, year=year, fuel_type=fuel_type, operation_type=operation_type
    )
    data = [rate.to_dict() for rate in rates]
    return api_response({'message': 'Taxas obtidas com sucesso', 'data': data, 'count': len(data)})
