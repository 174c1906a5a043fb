"""
JSON request/response helpers shared by the API views.
"""
import json
import logging
from decimal import Decimal
from functools import wraps

from django.core.serializers.json import DjangoJSONEncoder
from django.http import JsonResponse

from .exceptions import AuthenticationFailed, InvalidInput, PermissionDenied

logger = logging.getLogger(__name__)


class DecimalJSONEncoder(DjangoJSONEncoder):
    """Serialize Decimal as a JSON number (the SPA does arithmetic on it)."""

    def default(self, o):
        if isinstance(o, Decimal):
            return float(o)
        return super().default(o)


def api_response(payload, status=200):
    return JsonResponse(payload, status=status, encoder=DecimalJSONEncoder)


def parse_json(request):
    """Request body as a dict; an empty body is an empty dict."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise InvalidInput({'body': ['Formato de dados inválido']}, message='JSON inválido')
    if not isinstance(data, dict):
        raise InvalidInput({'body': ['O corpo da requisição deve ser um objeto JSON']}, message='JSON inválido')
    return data


def to_form_data(payload, field_map):
    """
    Rename wire (camelCase) keys to form (snake_case) keys.

    Keys missing from field_map pass through unchanged so the form can
    ignore them.
    """
    return {field_map.get(key, key): value for key, value in payload.items()}


def raise_form_errors(form, field_map=None):
    """Turn bound form errors into InvalidInput, naming the wire fields."""
    reverse_map = {v: k for k, v in (field_map or {}).items()}
    errors = {
        reverse_map.get(field, field): [str(message) for message in messages]
        for field, messages in form.errors.items()
    }
    raise InvalidInput(errors)


def api_login_required(view_func):
    """login_required for JSON endpoints: 401 instead of a redirect."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            raise AuthenticationFailed()
        return view_func(request, *args, **kwargs)
    return _wrapped


def staff_required(view_func):
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            raise AuthenticationFailed()
        if not request.user.is_staff:
            raise PermissionDenied()
        return view_func(request, *args, **kwargs)
    return _wrapped
