"""
accounts app fixtures
"""
import pytest
from django.contrib.auth.models import User


@pytest.fixture(autouse=True)
def fast_hasher(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def test_user(db):
    return User.objects.create_user(
        username='maria@example.com', email='maria@example.com', password='segredo1', first_name='Maria'
    )


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        username='admin@example.com', email='admin@example.com', password='segredo1', is_staff=True
    )


@pytest.fixture
def auth_client(client, test_user):
    client.force_login(test_user)
    return client


@pytest.fixture
def staff_client(client, staff_user):
    client.force_login(staff_user)
    return client
