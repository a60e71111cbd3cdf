"""
Tests for model validation, the ledger models and the admin.
"""

from decimal import Decimal

import pytest
from django.contrib import admin
from django.db import IntegrityError, transaction

from flowman.exceptions import DocumentBuildError, DocumentError, StockError
from flowman.models import (
    Document,
    DocumentState,
    DocumentType,
    Location,
    Move,
    Position,
    Resource,
    StorageLocation,
)
from flowman.services import StockMovements


pytestmark = pytest.mark.django_db


class TestValidatedModel:

    def test_new_instance_is_valid(self):
        document = Document()

        assert document.is_valid
        assert document.errors == []

    def test_add_error_marks_invalid(self):
        document = Document()

        document.add_error('algo deu errado')

        assert not document.is_valid
        assert document.errors == ['algo deu errado']

    def test_save_validated_skips_invalid(self, user):
        document = Document(user=user)

        document.save_validated()

        assert not document.is_valid
        assert document.pk is None

    def test_save_validated_saves_valid(self, user, deposito):
        document = Document(user=user, type=DocumentType.RECEIPT, location_to=deposito)

        document.save_validated()

        assert document.is_valid
        assert document.pk is not None


class TestDocument:

    @pytest.mark.parametrize('document_type, inbound, outbound', [
        (DocumentType.RECEIPT, True, False),
        (DocumentType.INTERNAL_INBOUND, True, False),
        (DocumentType.RETURN, True, False),
        (DocumentType.RELEASE, False, True),
        (DocumentType.INTERNAL_OUTBOUND, False, True),
        (DocumentType.TRANSFER, False, False),
    ])
    def test_direction(self, document_type, inbound, outbound):
        document = Document(type=document_type)

        assert document.is_inbound is inbound
        assert document.is_outbound is outbound

    def test_release_requires_location_from(self, user):
        document = Document(user=user, type=DocumentType.RELEASE)

        assert not document.validate()
        assert any(message.startswith('location_from:') for message in document.errors)

    def test_stock_location(self, deposito, loja):
        assert Document(type=DocumentType.RELEASE, location_from=deposito).stock_location == deposito
        assert Document(type=DocumentType.TRANSFER, location_from=deposito,
                        location_to=loja).stock_location == loja

    def test_position_list_reads_saved_positions(self, user, deposito, farinha):
        document = Document.objects.create(user=user, type=DocumentType.RECEIPT, location_to=deposito)
        Position.objects.create(document=document, number=1, product=farinha, quantity=Decimal('1'))

        fresh = Document.objects.get(pk=document.pk)

        assert len(fresh.position_list) == 1

    def test_str(self, user, deposito):
        document = Document(user=user, type=DocumentType.RECEIPT, state=DocumentState.DRAFT)

        assert 'novo' in str(document)


class TestPosition:

    def _position(self, user, location, product, **kwargs):
        document = Document.objects.create(user=user, type=DocumentType.RECEIPT, location_to=location)
        kwargs.setdefault('quantity', Decimal('1'))
        return Position(document=document, number=1, product=product, **kwargs)

    def test_valid(self, user, deposito, farinha):
        assert self._position(user, deposito, farinha).validate()

    @pytest.mark.parametrize('field, value', [
        ('quantity', Decimal('0')),
        ('given_quantity', Decimal('-1')),
        ('conversion', Decimal('0')),
        ('price', Decimal('-0.01')),
    ])
    def test_invalid_numbers(self, user, deposito, farinha, field, value):
        position = self._position(user, deposito, farinha, **{field: value})

        assert not position.validate()
        assert any(message.startswith(f'{field}:') for message in position.errors)

    def test_expiration_before_production(self, user, deposito, farinha, today, next_week):
        position = self._position(user, deposito, farinha,
                                  production_date=next_week, expiration_date=today)

        assert not position.validate()

    def test_storage_location_of_other_location(self, user, deposito, loja, farinha):
        elsewhere = StorageLocation.objects.create(location=loja, number='B-02')
        position = self._position(user, deposito, farinha, storage_location=elsewhere)

        assert not position.validate()
        assert any(message.startswith('storage_location:') for message in position.errors)

    def test_resource_of_other_product(self, user, deposito, farinha, croissant):
        resource = StockMovements.receive(Decimal('1'), croissant, deposito)
        document = Document.objects.create(user=user, type=DocumentType.RELEASE, location_from=deposito)
        position = Position(document=document, number=1, product=farinha,
                            quantity=Decimal('1'), resource=resource)

        assert not position.validate()
        assert any(message.startswith('resource:') for message in position.errors)


class TestMove:

    def test_move_is_immutable(self, deposito, farinha):
        resource = StockMovements.receive(Decimal('3'), farinha, deposito)
        move = resource.moves.get()

        with pytest.raises(ValueError):
            move.save()
        with pytest.raises(ValueError):
            move.delete()

    def test_reason_required(self, deposito, farinha):
        resource = StockMovements.receive(Decimal('3'), farinha, deposito)

        with pytest.raises(ValueError):
            Move.objects.create(resource=resource, delta=Decimal('1'), reason='')

    def test_reason_from_position_document(self, user, deposito, farinha):
        resource = StockMovements.receive(Decimal('3'), farinha, deposito)
        document = Document.objects.create(user=user, type=DocumentType.RELEASE, location_from=deposito)
        position = Position.objects.create(document=document, number=1, product=farinha,
                                           quantity=Decimal('1'))

        move = Move.objects.create(resource=resource, delta=Decimal('-1'), position=position, reason='')

        assert move.reason == f"Liberação #{document.pk}"
        assert move.document == document
        assert not move.is_inbound

    def test_move_updates_cache(self, deposito, farinha):
        resource = StockMovements.receive(Decimal('3'), farinha, deposito)

        Move.objects.create(resource=resource, delta=Decimal('-1'), reason='Ajuste')

        resource.refresh_from_db()
        assert resource.quantity == Decimal('2')


class TestLocation:

    def test_receipt_location(self, deposito, loja):
        deposito.receipt_location = loja
        deposito.save()

        assert Location.objects.get(code='deposito').receipt_location == loja

    def test_storage_location_number_unique_per_location(self, deposito, loja):
        StorageLocation.objects.create(location=deposito, number='A-01')
        StorageLocation.objects.create(location=loja, number='A-01')

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                StorageLocation.objects.create(location=deposito, number='A-01')


class TestExceptions:

    def test_default_message(self):
        error = DocumentError('PRODUCT_REQUIRED')

        assert error.message == 'Produto é obrigatório'
        assert 'PRODUCT_REQUIRED' in str(error)

    def test_as_dict_stringifies_decimals(self):
        error = StockError('INSUFFICIENT_QUANTITY', available=Decimal('2'), requested=Decimal('5'))

        assert error.as_dict() == {
            'code': 'INSUFFICIENT_QUANTITY',
            'message': 'Quantidade insuficiente no estoque',
            'data': {'available': '2', 'requested': '5'},
        }

    def test_build_error(self):
        document = Document()
        document.add_error('type: obrigatório')
        position = Position()

        error = DocumentBuildError(document, [position])

        assert error.code == 'INVALID_DOCUMENT'
        assert isinstance(error, DocumentError)
        assert error.invalid_positions == [position]
        assert error.data == {'errors': ['type: obrigatório'], 'invalid_positions': 1}


class TestAdmin:

    @pytest.mark.parametrize('model', [Location, Document, Resource, Move])
    def test_registered(self, model):
        assert admin.site.is_registered(model)

    def test_documents_are_read_only(self, rf):
        model_admin = admin.site._registry[Document]

        assert not model_admin.has_add_permission(rf.get('/'))
        assert not model_admin.has_change_permission(rf.get('/'))
