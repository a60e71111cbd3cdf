"""
Stock movements — state-changing ledger operations (receive, issue).

All methods use transaction.atomic() with appropriate locking.
"""

import logging
from decimal import Decimal

from django.contrib.contenttypes.models import ContentType
from django.db import transaction

from flowman.conf import flowman_settings
from flowman.exceptions import StockError
from flowman.models.move import Move
from flowman.models.resource import Resource

logger = logging.getLogger('flowman')

# Lot attributes copied onto a new Resource
LOT_FIELDS = (
    'batch',
    'price',
    'production_date',
    'expiration_date',
    'storage_location',
    'pallet_number',
    'type_of_pallet',
)


def _resolve_reason(reason, position) -> str:
    """Explicit reason, else the one of the position's document."""
    if reason:
        return reason
    if position is not None and position.document_id is not None:
        return Move.reason_for(position.document)
    raise StockError('REASON_REQUIRED')


class StockMovements:
    """State-changing stock movement methods."""

    @classmethod
    def receive(cls, quantity, product, location, document=None,
                position=None, user=None, reason='Recebimento', **lot):
        """
        Stock entry.

        Every receipt is its own lot: creates a Resource at the location
        and a Move with positive delta.

        Args:
            lot: Any of LOT_FIELDS (batch, price, dates, storage, pallet)

        Raises:
            StockError('INVALID_QUANTITY'): If quantity <= 0
            StockError('REASON_REQUIRED'): If reason is empty and there
                is no position to take it from
        """
        reason = _resolve_reason(reason, position)

        if quantity <= 0:
            raise StockError('INVALID_QUANTITY', requested=quantity)

        unknown = set(lot) - set(LOT_FIELDS)
        if unknown:
            raise TypeError(f"Atributos de lote desconhecidos: {', '.join(sorted(unknown))}")

        lot = {k: v for k, v in lot.items() if v is not None}

        with transaction.atomic():
            resource = Resource.objects.create(
                content_type=ContentType.objects.get_for_model(product),
                object_id=product.pk,
                location=location,
                document=document,
                **lot
            )

            Move.objects.create(
                resource=resource,
                delta=quantity,
                position=position,
                reason=reason,
                user=user,
            )

            resource.refresh_from_db()
            logger.info(
                "stock.receive",
                extra={
                    "product": str(product),
                    "qty": str(quantity),
                    "location": str(location),
                    "reason": reason,
                    "resource_id": resource.pk,
                },
            )
            return resource

    @classmethod
    def issue(cls, quantity, resource, position=None,
              user=None, reason='Saída'):
        """
        Stock exit from a specific resource.

        Raises:
            StockError('INSUFFICIENT_QUANTITY'): If quantity > resource quantity
            StockError('INVALID_QUANTITY'): If quantity <= 0
            StockError('REASON_REQUIRED'): If reason is empty and there
                is no position to take it from

        Concurrency:
            - Runs under transaction.atomic()
            - Uses select_for_update() on Resource
            - Verifies quantity after lock
        """
        reason = _resolve_reason(reason, position)

        if quantity <= 0:
            raise StockError('INVALID_QUANTITY', requested=quantity)

        with transaction.atomic():
            locked = Resource.objects.select_for_update().get(pk=resource.pk)

            if locked.quantity < quantity:
                raise StockError(
                    'INSUFFICIENT_QUANTITY',
                    available=locked.quantity,
                    requested=quantity,
                    resource_id=resource.pk,
                )

            move = Move.objects.create(
                resource=locked,
                delta=-quantity,
                position=position,
                reason=reason,
                user=user,
            )
            logger.info(
                "stock.issue",
                extra={
                    "resource_id": resource.pk,
                    "qty": str(quantity),
                    "reason": reason,
                },
            )
            return move

    @classmethod
    def issue_fifo(cls, quantity, product, location, position=None,
                   user=None, reason='Saída', by_expiration=None):
        """
        Stock exit picking lots in FIFO order.

        Returns:
            List of Moves, one per touched resource, in picking order

        Raises:
            StockError('INSUFFICIENT_QUANTITY'): If the location holds
                less than quantity of the product in total
            StockError('INVALID_QUANTITY'): If quantity <= 0
            StockError('REASON_REQUIRED'): If reason is empty and there
                is no position to take it from

        Concurrency:
            - Runs under transaction.atomic()
            - Locks every candidate resource with select_for_update()
        """
        reason = _resolve_reason(reason, position)

        if quantity <= 0:
            raise StockError('INVALID_QUANTITY', requested=quantity)

        if by_expiration is None:
            by_expiration = flowman_settings.FIFO_BY_EXPIRATION

        with transaction.atomic():
            resources = list(
                Resource.objects.select_for_update()
                .for_product(product)
                .at_location(location)
                .in_stock()
                .fifo(by_expiration)
            )

            available = sum((r.quantity for r in resources), Decimal('0'))
            if available < quantity:
                raise StockError(
                    'INSUFFICIENT_QUANTITY',
                    available=available,
                    requested=quantity,
                    product=str(product),
                    location=str(location),
                )

            moves = []
            remaining = quantity
            for resource in resources:
                if remaining <= 0:
                    break
                take = min(resource.quantity, remaining)
                moves.append(Move.objects.create(
                    resource=resource,
                    delta=-take,
                    position=position,
                    reason=reason,
                    user=user,
                ))
                remaining -= take

            logger.info(
                "stock.issue",
                extra={
                    "product": str(product),
                    "qty": str(quantity),
                    "location": str(location),
                    "reason": reason,
                    "resources": [m.resource_id for m in moves],
                },
            )
            return moves
