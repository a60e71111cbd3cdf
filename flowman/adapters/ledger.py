"""
Ledger Resource Backend — books accepted documents into Resource/Move.

Booking rules by document type:
    RECEIPT, INTERNAL_INBOUND, RETURN  →  new lot per position at location_to
    RELEASE, INTERNAL_OUTBOUND         →  issue at location_from (pinned lot or FIFO)
    TRANSFER                           →  issue at location_from, receive the
                                          issued lots at location_to
"""

import logging

from django.db import transaction

from flowman.models.move import Move
from flowman.services.movements import StockMovements

logger = logging.getLogger('flowman')


class LedgerResourceBackend:
    """Implements ResourceBackend on top of StockMovements."""

    def create_resources(self, document) -> None:
        reason = Move.reason_for(document)

        with transaction.atomic():
            for position in document.position_list:
                if document.is_inbound:
                    self._receive(document, position, reason)
                elif document.is_outbound:
                    self._issue(document, position, reason)
                elif document.is_transfer:
                    self._transfer(document, position, reason)

        logger.info(
            "document.resources",
            extra={
                "document_id": document.pk,
                "type": document.type,
                "positions": len(document.position_list),
            },
        )

    def _receive(self, document, position, reason):
        resource = StockMovements.receive(
            position.quantity,
            position.product,
            document.location_to,
            document=document,
            position=position,
            user=document.user,
            reason=reason,
            batch=position.batch,
            price=position.price,
            production_date=position.production_date,
            expiration_date=position.expiration_date,
            storage_location=position.storage_location,
            pallet_number=position.pallet_number,
            type_of_pallet=position.type_of_pallet,
        )
        position.resource = resource
        position.save(update_fields=['resource'])
        return resource

    def _issue(self, document, position, reason):
        if position.resource_id is not None:
            move = StockMovements.issue(
                position.quantity,
                position.resource,
                position=position,
                user=document.user,
                reason=reason,
            )
            return [move]

        return StockMovements.issue_fifo(
            position.quantity,
            position.product,
            document.location_from,
            position=position,
            user=document.user,
            reason=reason,
        )

    def _transfer(self, document, position, reason):
        for move in self._issue(document, position, reason):
            source = move.resource
            StockMovements.receive(
                -move.delta,
                position.product,
                document.location_to,
                document=document,
                position=position,
                user=document.user,
                reason=reason,
                batch=source.batch,
                price=source.price,
                production_date=source.production_date,
                expiration_date=source.expiration_date,
                storage_location=position.storage_location,
                pallet_number=position.pallet_number or source.pallet_number,
                type_of_pallet=source.type_of_pallet,
            )
