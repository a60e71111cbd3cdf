"""
Tests for LedgerResourceBackend and StockMovements.

Accepted documents go through the real ledger here (default settings).
"""

from decimal import Decimal

import pytest

from flowman import documents
from flowman.exceptions import StockError
from flowman.models import Document, Move, Resource
from flowman.services import StockMovements, StockQueries


pytestmark = pytest.mark.django_db


def _receive(user, location, product, quantity, **attributes):
    return (
        documents.receipt(location, user=user)
        .add_position(product, quantity, **attributes)
        .set_accepted()
        .build()
    )


class TestInbound:
    """Tests for receipts, internal inbounds and returns."""

    def test_receipt_creates_resource_per_position(self, user, deposito, farinha, croissant, next_week):
        document = (
            documents.receipt(deposito, user=user)
            .add_position(farinha, Decimal('25'), batch='L-0423', price=Decimal('4.90'),
                          expiration_date=next_week)
            .add_position(croissant, Decimal('12'))
            .set_accepted()
            .build()
        )

        assert document.is_valid
        assert Resource.objects.filter(document=document).count() == 2

        first, second = document.positions.all()
        assert first.resource.quantity == Decimal('25')
        assert first.resource.batch == 'L-0423'
        assert first.resource.price == Decimal('4.90')
        assert first.resource.expiration_date == next_week
        assert first.resource.location == deposito
        assert second.resource.product == croissant

    def test_receipt_writes_moves(self, user, deposito, farinha, ten):
        document = _receive(user, deposito, farinha, ten)

        move = Move.objects.get(position__document=document)
        assert move.delta == ten
        assert move.user == user
        assert str(document.pk) in move.reason

    def test_same_batch_twice_is_two_lots(self, user, deposito, farinha, ten):
        _receive(user, deposito, farinha, ten, batch='L1')
        _receive(user, deposito, farinha, ten, batch='L1')

        assert Resource.objects.for_product(farinha).count() == 2
        assert StockQueries.quantity(farinha, deposito) == Decimal('20')

    def test_storage_location_copied(self, user, deposito, farinha, prateleira, palete, ten):
        document = _receive(user, deposito, farinha, ten, storage_location=prateleira,
                            pallet_number=palete, type_of_pallet='PBR')

        resource = document.positions.get().resource
        assert resource.storage_location == prateleira
        assert resource.pallet_number == palete
        assert resource.type_of_pallet == 'PBR'

    def test_draft_books_nothing(self, user, deposito, farinha, ten):
        documents.receipt(deposito, user=user).add_position(farinha, ten).build()

        assert not Resource.objects.exists()
        assert not Move.objects.exists()

    def test_return(self, user, loja, croissant):
        document = (
            documents.returned(loja, user=user)
            .add_position(croissant, Decimal('2'))
            .set_accepted()
            .build()
        )

        assert document.is_valid
        assert StockQueries.quantity(croissant, loja) == Decimal('2')


class TestOutbound:
    """Tests for releases and internal outbounds."""

    def test_release_fifo(self, user, deposito, farinha):
        _receive(user, deposito, farinha, Decimal('5'))
        _receive(user, deposito, farinha, Decimal('5'))

        document = (
            documents.release(deposito, user=user)
            .add_position(farinha, Decimal('7'))
            .set_accepted()
            .build()
        )

        assert document.is_valid
        quantities = [r.quantity for r in Resource.objects.for_product(farinha).order_by('pk')]
        assert quantities == [Decimal('0'), Decimal('3')]
        assert StockQueries.quantity(farinha, deposito) == Decimal('3')

    def test_expiring_lot_issued_first(self, user, deposito, farinha, today, next_week):
        _receive(user, deposito, farinha, Decimal('5'), expiration_date=next_week)
        _receive(user, deposito, farinha, Decimal('5'), expiration_date=today)

        documents.internal_outbound(deposito, user=user).add_position(
            farinha, Decimal('5')).set_accepted().build()

        remaining = Resource.objects.in_stock().get()
        assert remaining.expiration_date == next_week

    def test_pinned_resource(self, user, deposito, farinha):
        first = _receive(user, deposito, farinha, Decimal('5')).positions.get().resource
        second = _receive(user, deposito, farinha, Decimal('5')).positions.get().resource

        documents.release(deposito, user=user).add_position(
            farinha, Decimal('2'), resource=second).set_accepted().build()

        first.refresh_from_db()
        second.refresh_from_db()
        assert first.quantity == Decimal('5')
        assert second.quantity == Decimal('3')

    def test_pinned_resource_elsewhere_is_invalid(self, user, deposito, loja, farinha):
        resource = _receive(user, loja, farinha, Decimal('5')).positions.get().resource

        document = documents.release(deposito, user=user).add_position(
            farinha, Decimal('2'), resource=resource).set_accepted().build()

        assert not document.is_valid
        assert any(message.startswith('resource:') for message in document.errors)

    def test_insufficient_stock_raises_and_rolls_back(self, user, deposito, farinha):
        _receive(user, deposito, farinha, Decimal('5'))
        documents_before = Document.objects.count()

        with pytest.raises(StockError) as exc:
            documents.release(deposito, user=user).add_position(
                farinha, Decimal('8')).set_accepted().build()

        assert exc.value.code == 'INSUFFICIENT_QUANTITY'
        assert exc.value.available == Decimal('5')
        assert exc.value.requested == Decimal('8')
        assert Document.objects.count() == documents_before
        assert StockQueries.quantity(farinha, deposito) == Decimal('5')


class TestTransfer:
    """Tests for transfers."""

    def test_transfer_moves_lots(self, user, deposito, loja, farinha, next_week):
        _receive(user, deposito, farinha, Decimal('10'), batch='L7', expiration_date=next_week)

        document = (
            documents.transfer(loja, deposito, user=user)
            .add_position(farinha, Decimal('4'))
            .set_accepted()
            .build()
        )

        assert document.is_valid
        assert StockQueries.quantity(farinha, deposito) == Decimal('6')
        assert StockQueries.quantity(farinha, loja) == Decimal('4')

        moved = Resource.objects.for_product(farinha).at_location(loja).get()
        assert moved.batch == 'L7'
        assert moved.expiration_date == next_week
        assert moved.document == document

    def test_transfer_to_same_location_is_invalid(self, user, deposito, farinha, ten):
        document = documents.transfer(deposito, deposito, user=user).add_position(farinha, ten).build()

        assert not document.is_valid
        assert any(message.startswith('location_to:') for message in document.errors)


class TestStockMovements:
    """Direct tests for the ledger operations."""

    def test_receive_rejects_non_positive(self, deposito, farinha):
        with pytest.raises(StockError) as exc:
            StockMovements.receive(Decimal('0'), farinha, deposito)

        assert exc.value.code == 'INVALID_QUANTITY'

    def test_receive_rejects_unknown_lot_field(self, deposito, farinha, ten):
        with pytest.raises(TypeError):
            StockMovements.receive(ten, farinha, deposito, colour='blue')

    def test_issue_more_than_available(self, deposito, farinha, ten):
        resource = StockMovements.receive(ten, farinha, deposito)

        with pytest.raises(StockError) as exc:
            StockMovements.issue(Decimal('11'), resource)

        assert exc.value.code == 'INSUFFICIENT_QUANTITY'
        assert exc.value.as_dict()['data']['available'] == '10.000'

    def test_issue_without_reason(self, deposito, farinha, ten):
        resource = StockMovements.receive(ten, farinha, deposito)

        with pytest.raises(StockError) as exc:
            StockMovements.issue(Decimal('1'), resource, reason='')

        assert exc.value.code == 'REASON_REQUIRED'
        resource.refresh_from_db()
        assert resource.quantity == ten

    def test_receive_and_issue_fifo_without_reason(self, deposito, farinha, ten):
        with pytest.raises(StockError) as exc:
            StockMovements.receive(ten, farinha, deposito, reason=None)
        assert exc.value.code == 'REASON_REQUIRED'

        with pytest.raises(StockError) as exc:
            StockMovements.issue_fifo(ten, farinha, deposito, reason='')
        assert exc.value.code == 'REASON_REQUIRED'

        assert not Move.objects.exists()

    def test_reason_taken_from_position(self, user, deposito, farinha, ten):
        document = documents.receipt(deposito, user=user).add_position(farinha, ten).build()
        position = document.positions.get()

        resource = StockMovements.receive(ten, farinha, deposito, position=position, reason='')

        assert resource.moves.get().reason == f"Recebimento #{document.pk}"

    def test_issue_fifo_by_age(self, deposito, farinha, today, next_week):
        older = StockMovements.receive(Decimal('3'), farinha, deposito, expiration_date=next_week)
        StockMovements.receive(Decimal('3'), farinha, deposito, expiration_date=today)

        moves = StockMovements.issue_fifo(Decimal('2'), farinha, deposito, by_expiration=False)

        assert [m.resource_id for m in moves] == [older.pk]

    def test_recalculate_matches_cache(self, deposito, farinha, ten):
        resource = StockMovements.receive(ten, farinha, deposito)
        StockMovements.issue(Decimal('4'), resource)

        resource.refresh_from_db()
        assert resource.recalculate() == Decimal('6')
        assert resource.quantity == Decimal('6')
