"""
Pytest fixtures for Flowman tests.
"""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import Mock

import pytest
from django.contrib.auth import get_user_model

from flowman.adapters import reset_backends
from flowman.builder import DocumentBuilder
from flowman.models import Location, LocationKind, PalletNumber, StorageLocation
from flowman.tests.catalog.models import Product


User = get_user_model()


@pytest.fixture(autouse=True)
def _reset_backends():
    """Backends are cached per process; start every test clean."""
    reset_backends()
    yield
    reset_backends()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='testuser',
        password='testpass123'
    )


@pytest.fixture
def farinha(db):
    """Product sold by weight."""
    return Product.objects.create(name='Farinha de Trigo', sku='FAR-001', unit='kg')


@pytest.fixture
def croissant(db):
    """Product sold by unit."""
    return Product.objects.create(name='Croissant', sku='CRO-001', unit='un')


@pytest.fixture
def deposito(db):
    """Main warehouse."""
    location, _ = Location.objects.get_or_create(
        code='deposito',
        defaults={'name': 'Depósito', 'kind': LocationKind.PHYSICAL},
    )
    return location


@pytest.fixture
def loja(db):
    """Shop floor."""
    location, _ = Location.objects.get_or_create(
        code='loja',
        defaults={'name': 'Loja', 'kind': LocationKind.PHYSICAL},
    )
    return location


@pytest.fixture
def prateleira(deposito):
    """Storage slot inside the warehouse."""
    return StorageLocation.objects.create(location=deposito, number='A-01')


@pytest.fixture
def palete(db):
    return PalletNumber.objects.create(number='P-0001')


@pytest.fixture
def resource_backend():
    """Resource backend that only records calls."""
    return Mock(spec=['create_resources'])


@pytest.fixture
def connected_backend():
    """Connected document backend that never builds."""
    backend = Mock(spec=['should_build_connected_document', 'build_connected_document'])
    backend.should_build_connected_document.return_value = False
    return backend


@pytest.fixture
def make_builder(user, resource_backend, connected_backend):
    """Builder factory wired to the mock collaborators."""
    def factory(**kwargs):
        kwargs.setdefault('user', user)
        kwargs.setdefault('resource_backend', resource_backend)
        kwargs.setdefault('connected_document_backend', connected_backend)
        return DocumentBuilder(**kwargs)
    return factory


@pytest.fixture
def today():
    """Return today's date."""
    return date.today()


@pytest.fixture
def next_week():
    return date.today() + timedelta(days=7)


@pytest.fixture
def ten():
    return Decimal('10')
