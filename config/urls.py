from django.contrib import admin
from django.urls import include, path, re_path

from apps.core import views as core_views

urlpatterns = [
    path('', core_views.index, name='index'),
    path('admin/', admin.site.urls),

    path('api/health/', core_views.health, name='health'),
    path('api/auth/', include('apps.accounts.urls')),
    path('api/operations/', include('apps.operations.urls')),
    path('api/', include('apps.rates.urls')),

    # anything else under /api/ answers JSON, not the HTML 404 page
    re_path(r'^api/(?P<path>.*)$', core_views.api_not_found, name='api_not_found'),
]
