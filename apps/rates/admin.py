from django.contrib import admin

from .models import Rate


@admin.register(Rate)
class RateAdmin(admin.ModelAdmin):
    list_display = ['year', 'month', 'fuel_type', 'operation_type', 'unit_price', 'tax_rate', 'updated_at']
    list_filter = ['year', 'month', 'fuel_type', 'operation_type']
    ordering = ['-year', 'month', 'operation_type', 'fuel_type']
