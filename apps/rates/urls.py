from django.urls import path
from . import views

app_name = 'rates'

urlpatterns = [
    # select options
    path('config/fuel-types/', views.fuel_types, name='fuel_types'),
    path('config/operation-types/', views.operation_types, name='operation_types'),
    path('config/months/', views.months, name='months'),
    path('config/years/', views.years, name='years'),
    path('config/all/', views.all_config, name='all_config'),

    # rate table
    path('rates/', views.rate_list, name='rate_list'),
]
