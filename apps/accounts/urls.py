from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('csrf/', views.csrf, name='csrf'),
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),
    path('profile/', views.profile, name='profile'),

    # staff
    path('users/', views.user_list, name='user_list'),
    path('users/<int:pk>/', views.user_detail, name='user_detail'),
    path('users/<int:pk>/deactivate/', views.user_deactivate, name='user_deactivate'),
    path('users/<int:pk>/activate/', views.user_activate, name='user_activate'),
]
