"""
API error middleware

Views raise FuelTaxError subclasses; this turns them into the JSON
envelope the front end reads ({"error", "code", "details"}).
"""
import logging

from .exceptions import FuelTaxError
from .http import api_response

logger = logging.getLogger(__name__)


class ApiErrorMiddleware:

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if isinstance(exception, FuelTaxError):
            logger.warning(
                f"{request.method} {request.path} -> {exception.status_code} "
                f"{exception.code}: {exception.message}"
            )
            return api_response(exception.as_dict(), status=exception.status_code)

        if request.path.startswith('/api/'):
            logger.error(f"Erro inesperado em {request.method} {request.path}: {exception}", exc_info=True)
        # anything else is Django's to handle
        return None
