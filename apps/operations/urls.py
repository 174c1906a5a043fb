from django.urls import path
from . import views

app_name = 'operations'

urlpatterns = [
    path('', views.operation_collection, name='operation_collection'),
    path('<int:pk>/', views.operation_item, name='operation_item'),

    # aggregation
    path('statistics/', views.statistics, name='statistics'),
    path('difference/', views.difference, name='difference'),
    path('report/', views.report, name='report'),
    path('report/export/', views.report_export, name='report_export'),

    path('preview/', views.preview, name='preview'),
]
