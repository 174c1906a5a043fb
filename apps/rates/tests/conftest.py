import pytest


@pytest.fixture
def seeded_rates(db):
    """The 2024 table loaded by migration 0002"""
    from apps.rates.models import Rate
    return Rate.objects.all()
