from django.conf import settings
from django.utils import timezone
from django.views.decorators.http import require_GET

from .http import api_response


@require_GET
def health(request):
    """Heartbeat for monitoring"""
    return api_response({
        'status': 'OK',
        'timestamp': timezone.now(),
        'environment': 'development' if settings.DEBUG else 'production',
    })


def api_not_found(request, path=''):
    return api_response(
        {'error': f'Rota não encontrada: {request.method} {request.path}', 'code': 'not_found'},
        status=404,
    )


@require_GET
def index(request):
    return api_response({
        'message': 'API de operações de combustível',
        'health': '/api/health/',
        'endpoints': ['/api/auth/', '/api/operations/', '/api/config/', '/api/rates/'],
    })
