"""
Operations API

JSON in, JSON out. Validation lives in forms.py, the rate lookup and the
valuation in services.py; a failure anywhere surfaces as a FuelTaxError
that ApiErrorMiddleware turns into the error envelope.
"""
import logging

from django.http import HttpResponse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.core.exceptions import PermissionDenied
from apps.core.http import api_login_required, api_response, parse_json, raise_form_errors, to_form_data
from . import services
from .calc import summarize
from .forms import (
    FIELD_MAP,
    DifferenceFilterForm,
    OperationFilterForm,
    OperationForm,
    OperationUpdateForm,
)
from .utils import export_operations_to_excel

logger = logging.getLogger(__name__)


def _bound_form(form_class, data):
    form = form_class(to_form_data(data, FIELD_MAP))
    if not form.is_valid():
        raise_form_errors(form, FIELD_MAP)
    return form


def _query_form(request, form_class):
    return _bound_form(form_class, request.GET.dict())


def _scope_user(request, form):
    """
    Owner to scope queries to; None means every user's operations.
    scope=all is for staff only.
    """
    if form.cleaned_data.get('scope') == 'all':
        if not request.user.is_staff:
            raise PermissionDenied('Apenas administradores podem consultar todas as operações')
        return None
    return request.user


# ============================================================
# Collection / item
# ============================================================

@api_login_required
@require_http_methods(['GET', 'POST'])
def operation_collection(request):
    if request.method == 'POST':
        return _operation_create(request)
    return _operation_list(request)


def _operation_list(request):
    form = _query_form(request, OperationFilterForm)
    result = services.list_operations(
        form.filters(),
        form.cleaned_data['page'],
        form.cleaned_data['limit'],
        user=_scope_user(request, form),
    )
    return api_response({'message': 'Operações listadas com sucesso', **result})


def _operation_create(request):
    form = _bound_form(OperationForm, parse_json(request))
    operation = services.create_operation(form.cleaned_data, request.user)
    return api_response(
        {'message': 'Operação criada com sucesso', 'operation': operation.to_dict()},
        status=201,
    )


@api_login_required
@require_http_methods(['GET', 'PUT', 'PATCH', 'DELETE'])
def operation_item(request, pk):
    if request.method == 'GET':
        operation = services.get_operation(pk, request.user)
        return api_response({'message': 'Operação encontrada', 'operation': operation.to_dict()})

    if request.method == 'DELETE':
        services.delete_operation(pk, request.user)
        return api_response({'message': 'Operação removida com sucesso'})

    form = _bound_form(OperationUpdateForm, parse_json(request))
    operation = services.update_operation(pk, form.provided_data(), request.user)
    return api_response({'message': 'Operação atualizada com sucesso', 'operation': operation.to_dict()})


# ============================================================
# Aggregation
# ============================================================

@api_login_required
@require_GET
def statistics(request):
    form = _query_form(request, OperationFilterForm)
    data = services.get_statistics(form.filters(), user=_scope_user(request, form))
    return api_response({'message': 'Estatísticas obtidas com sucesso', 'statistics': data})


@api_login_required
@require_GET
def difference(request):
    form = _query_form(request, DifferenceFilterForm)
    data = services.get_purchase_sale_difference(form.filters(), user=_scope_user(request, form))
    return api_response({'message': 'Diferença calculada com sucesso', 'difference': data})


@api_login_required
@require_GET
def report(request):
    form = _query_form(request, OperationFilterForm)
    data = services.generate_report(
        form.filters(),
        form.cleaned_data['page'],
        form.cleaned_data['limit'],
        user=_scope_user(request, form),
    )
    return api_response({'message': 'Relatório gerado com sucesso', **data})


@api_login_required
@require_GET
def report_export(request):
    """Same filters as report, whole result set as .xlsx"""
    form = _query_form(request, OperationFilterForm)
    filters = form.filters()
    user = _scope_user(request, form)

    operations = list(services.filtered_operations(filters, user))
    stats = summarize(operations)
    diff = services.get_purchase_sale_difference(filters, user)
    excel_file = export_operations_to_excel(operations, stats, diff)

    timestamp = timezone.localtime().strftime('%Y%m%d_%H%M%S')
    filename = f"operacoes_{request.user.pk}_{timestamp}.xlsx"
    response = HttpResponse(
        excel_file.read(),
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    logger.info(f"Relatório exportado: {len(operations)} operações, user={request.user.pk}")
    return response


@api_login_required
@require_POST
def preview(request):
    form = _bound_form(OperationForm, parse_json(request))
    data = services.calculate_preview(form.cleaned_data)
    return api_response({'message': 'Preview calculado com sucesso', 'data': data})
