from django.contrib import admin

from .models import Operation
from .utils import format_currency, format_quantity


@admin.register(Operation)
class OperationAdmin(admin.ModelAdmin):
    """
    Operations are valued through the API; the financial snapshot is read-only here.
    """
    list_display = [
        'id', 'user', 'type', 'fuel_type', 'get_quantity_display',
        'month', 'year', 'get_total_display', 'created_at',
    ]
    list_filter = ['type', 'fuel_type', 'year', 'month']
    search_fields = ['user__username', 'user__email']
    readonly_fields = ['unit_price', 'tax_rate', 'selic_rate', 'total_value', 'created_at', 'updated_at']
    list_select_related = ['user']
    date_hierarchy = 'created_at'

    @admin.display(description='Quantidade', ordering='quantity')
    def get_quantity_display(self, obj):
        return format_quantity(obj.quantity)

    @admin.display(description='Valor total', ordering='total_value')
    def get_total_display(self, obj):
        return format_currency(obj.total_value)
