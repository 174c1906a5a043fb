from decimal import Decimal

from django import forms
from django.conf import settings
from django.utils import timezone

from apps.rates.models import FUEL_TYPE_CHOICES, OPERATION_TYPE_CHOICES
from .models import MAX_QUANTITY

# wire (camelCase) -> form field
FIELD_MAP = {
    'fuelType': 'fuel_type',
}

TYPE_MESSAGE = 'Tipo deve ser "purchase" ou "sale"'
FUEL_TYPE_MESSAGE = 'Tipo de combustível deve ser "gasoline", "ethanol" ou "diesel"'
QUANTITY_MESSAGE = 'Quantidade deve ser um número entre 0.001 e 1.000.000 litros'
MONTH_MESSAGE = 'Mês deve ser um número entre 1 e 12'


def max_year():
    return timezone.now().year + 1


def year_message():
    return f'Ano deve ser um número entre {settings.FUEL_MIN_YEAR} e {max_year()}'


class OperationForm(forms.Form):
    """Create/preview payload (all violations are reported together)"""

    type = forms.ChoiceField(
        choices=OPERATION_TYPE_CHOICES,
        error_messages={'required': TYPE_MESSAGE, 'invalid_choice': TYPE_MESSAGE},
    )
    fuel_type = forms.ChoiceField(
        choices=FUEL_TYPE_CHOICES,
        error_messages={'required': FUEL_TYPE_MESSAGE, 'invalid_choice': FUEL_TYPE_MESSAGE},
    )
    quantity = forms.DecimalField(
        max_digits=10,
        decimal_places=3,
        min_value=Decimal('0.001'),
        max_value=MAX_QUANTITY,
        error_messages={
            'required': 'Quantidade é obrigatória',
            'invalid': QUANTITY_MESSAGE,
            'min_value': 'Quantidade deve ser maior que zero',
            'max_value': 'Quantidade máxima é de 1.000.000 litros',
            'max_decimal_places': 'Quantidade aceita no máximo 3 casas decimais',
            'max_digits': QUANTITY_MESSAGE,
            'max_whole_digits': QUANTITY_MESSAGE,
        },
    )
    month = forms.IntegerField(
        min_value=1,
        max_value=12,
        error_messages={
            'required': MONTH_MESSAGE,
            'invalid': MONTH_MESSAGE,
            'min_value': MONTH_MESSAGE,
            'max_value': MONTH_MESSAGE,
        },
    )
    year = forms.IntegerField(required=False)

    def clean_year(self):
        year = self.cleaned_data.get('year')
        if year is None:
            return settings.FUEL_DEFAULT_YEAR
        if not settings.FUEL_MIN_YEAR <= year <= max_year():
            raise forms.ValidationError(year_message())
        return year


class OperationUpdateForm(OperationForm):
    """Partial update: every field optional, supplied ones validated as on create"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.required = False

    def clean_year(self):
        year = self.cleaned_data.get('year')
        if year is None:
            return None
        return super().clean_year()

    def provided_data(self):
        """Cleaned values for the fields the caller actually sent"""
        return {
            name: value
            for name, value in self.cleaned_data.items()
            if name in self.data and value not in (None, '')
        }


class DifferenceFilterForm(forms.Form):
    """month / year / fuelType filters (the difference always spans both types)"""

    month = forms.IntegerField(
        required=False, min_value=1, max_value=12,
        error_messages={'invalid': MONTH_MESSAGE, 'min_value': MONTH_MESSAGE, 'max_value': MONTH_MESSAGE},
    )
    year = forms.IntegerField(required=False)
    fuel_type = forms.ChoiceField(
        required=False,
        choices=[('', '')] + FUEL_TYPE_CHOICES,
        error_messages={'invalid_choice': FUEL_TYPE_MESSAGE},
    )
    scope = forms.ChoiceField(
        required=False,
        choices=[('', ''), ('mine', 'mine'), ('all', 'all')],
        error_messages={'invalid_choice': 'Escopo deve ser "mine" ou "all"'},
    )

    def clean_year(self):
        year = self.cleaned_data.get('year')
        if year is not None and not settings.FUEL_MIN_YEAR <= year <= max_year():
            raise forms.ValidationError(year_message())
        return year

    def filters(self):
        """Applied filters only, keyed for OperationQuerySet.apply_filters()"""
        return {
            name: value
            for name, value in self.cleaned_data.items()
            if name != 'scope' and value not in (None, '')
        }


class OperationFilterForm(DifferenceFilterForm):
    """Listing/statistics/report filters with pagination"""

    page = forms.IntegerField(
        required=False, min_value=1,
        error_messages={'invalid': 'Página deve ser um número inteiro positivo',
                        'min_value': 'Página deve ser um número inteiro positivo'},
    )
    limit = forms.IntegerField(
        required=False, min_value=1, max_value=settings.OPERATIONS_MAX_PAGE_SIZE,
        error_messages={
            'invalid': f'Limite deve ser um número entre 1 e {settings.OPERATIONS_MAX_PAGE_SIZE}',
            'min_value': f'Limite deve ser um número entre 1 e {settings.OPERATIONS_MAX_PAGE_SIZE}',
            'max_value': f'Limite deve ser um número entre 1 e {settings.OPERATIONS_MAX_PAGE_SIZE}',
        },
    )
    type = forms.ChoiceField(
        required=False,
        choices=[('', '')] + OPERATION_TYPE_CHOICES,
        error_messages={'invalid_choice': TYPE_MESSAGE},
    )

    def clean_page(self):
        return self.cleaned_data.get('page') or 1

    def clean_limit(self):
        return self.cleaned_data.get('limit') or settings.OPERATIONS_PAGE_SIZE

    def filters(self):
        return {
            name: value
            for name, value in super().filters().items()
            if name not in ('page', 'limit')
        }
