"""
operations app fixtures
"""
import pytest
from decimal import Decimal
from django.contrib.auth.models import User

from apps.operations.models import Operation


@pytest.fixture(autouse=True)
def fuel_settings(settings):
    """Pin the valuation settings regardless of the local .env"""
    settings.SELIC_RATE = Decimal('11.5')
    settings.FUEL_DEFAULT_YEAR = 2024
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
    return settings


@pytest.fixture
def test_user(db):
    return User.objects.create_user(username='tester@example.com', email='tester@example.com', password='pass1234')


@pytest.fixture
def other_user(db):
    """Another owner (isolation tests)"""
    return User.objects.create_user(username='other@example.com', email='other@example.com', password='pass1234')


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        username='admin@example.com', email='admin@example.com', password='pass1234', is_staff=True
    )


@pytest.fixture
def auth_client(client, test_user):
    client.force_login(test_user)
    return client


@pytest.fixture
def staff_client(client, staff_user):
    client.force_login(staff_user)
    return client


@pytest.fixture
def make_operation():
    """Persist an operation with explicit financial fields (no rate lookup)"""
    def _make(user, type='purchase', fuel_type='gasoline', quantity='100', month=1, year=2024,
              unit_price='5.92', tax_rate='17.20', selic_rate='11.50', total_value='773.61'):
        return Operation.objects.create(
            user=user,
            type=type,
            fuel_type=fuel_type,
            quantity=Decimal(quantity),
            month=month,
            year=year,
            unit_price=Decimal(unit_price),
            tax_rate=Decimal(tax_rate),
            selic_rate=Decimal(selic_rate),
            total_value=Decimal(total_value),
        )
    return _make
