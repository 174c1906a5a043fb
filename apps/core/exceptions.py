"""Domain error hierarchy surfaced by the JSON API."""


class FuelTaxError(Exception):
    """Base class for errors the API reports to the caller."""

    status_code = 400
    code = 'error'
    default_message = 'Erro ao processar a requisição'

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def as_dict(self):
        payload = {'error': self.message, 'code': self.code}
        if self.details:
            payload['details'] = self.details
        return payload


class InvalidInput(FuelTaxError):
    """Shape or range validation failed; carries one entry per field."""

    code = 'invalid_input'
    default_message = 'Dados inválidos'

    def __init__(self, errors, message=None):
        # errors: {field: [messages]}
        self.errors = errors
        details = [
            {'field': field, 'message': msg}
            for field, messages in errors.items()
            for msg in messages
        ]
        super().__init__(message, details)


class UnsupportedYear(FuelTaxError):
    """No rate data at all for the requested year."""

    code = 'unsupported_year'

    def __init__(self, year, available_years):
        self.year = year
        self.available_years = list(available_years)
        if self.available_years:
            years = ', '.join(str(y) for y in self.available_years)
            message = f'Apenas dados do ano de {years} estão disponíveis'
        else:
            message = 'Nenhuma tabela de taxas foi carregada'
        super().__init__(message, [{'field': 'year', 'message': f'Ano {year} não suportado'}])


class RateNotFound(FuelTaxError):
    """The year is supported but the month/fuel/type combination is missing."""

    status_code = 404
    code = 'rate_not_found'

    def __init__(self, month, year, fuel_type, operation_type):
        self.key = (month, year, fuel_type, operation_type)
        super().__init__(
            f'Taxa não encontrada para {fuel_type} em {month}/{year} do tipo {operation_type}'
        )


class TransactionNotFound(FuelTaxError):
    """Missing operation, or one owned by somebody else (reported identically)."""

    status_code = 404
    code = 'operation_not_found'
    default_message = 'Operação não encontrada'

    def __init__(self, operation_id=None):
        self.operation_id = operation_id
        super().__init__()


class AuthenticationFailed(FuelTaxError):
    status_code = 401
    code = 'not_authenticated'
    default_message = 'Autenticação necessária'


class PermissionDenied(FuelTaxError):
    status_code = 403
    code = 'permission_denied'
    default_message = 'Acesso negado'


class NotFound(FuelTaxError):
    status_code = 404
    code = 'not_found'
    default_message = 'Registro não encontrado'

