import pytest
from django.test import RequestFactory

from apps.core.exceptions import InvalidInput, RateNotFound, TransactionNotFound, UnsupportedYear
from apps.core.http import parse_json
from apps.core.middleware import ApiErrorMiddleware


def test_invalid_input_collects_every_message():
    error = InvalidInput({'month': ['a', 'b'], 'fuelType': ['c']})
    assert error.status_code == 400
    assert error.as_dict() == {
        'error': 'Dados inválidos',
        'code': 'invalid_input',
        'details': [
            {'field': 'month', 'message': 'a'},
            {'field': 'month', 'message': 'b'},
            {'field': 'fuelType', 'message': 'c'},
        ],
    }


def test_unsupported_year_names_available_years():
    error = UnsupportedYear(2025, [2024])
    assert error.status_code == 400
    assert error.message == 'Apenas dados do ano de 2024 estão disponíveis'


def test_not_found_errors():
    assert RateNotFound(1, 2024, 'diesel', 'sale').status_code == 404
    assert TransactionNotFound(7).as_dict() == {'error': 'Operação não encontrada', 'code': 'operation_not_found'}


def test_parse_json_rejects_non_objects():
    request = RequestFactory().post('/api/x/', data='[1, 2]', content_type='application/json')
    with pytest.raises(InvalidInput):
        parse_json(request)


def test_parse_json_empty_body():
    request = RequestFactory().post('/api/x/', data='', content_type='application/json')
    assert parse_json(request) == {}


class TestApiErrorMiddleware:
    def setup_method(self):
        self.middleware = ApiErrorMiddleware(lambda request: None)
        self.request = RequestFactory().get('/api/operations/1/')

    def test_domain_error_becomes_envelope(self):
        response = self.middleware.process_exception(self.request, TransactionNotFound(1))
        assert response.status_code == 404
        assert b'operation_not_found' in response.content

    def test_other_errors_are_left_to_django(self):
        assert self.middleware.process_exception(self.request, ValueError('boom')) is None
