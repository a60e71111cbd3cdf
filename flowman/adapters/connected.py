"""
Release Receipt Backend — connected "PZ" receipts for releases.

When a location names a receipt_location, every accepted release from it
produces an accepted receipt there with the same positions. The source
release points at the receipt through linked_document.

Usage in settings.py:
    FLOWMAN = {
        "CONNECTED_DOCUMENT_BACKEND": "flowman.adapters.connected.ReleaseReceiptBackend",
    }
"""

import logging

from flowman.models.enums import DocumentType

logger = logging.getLogger('flowman')


class ReleaseReceiptBackend:
    """
    Implements ConnectedDocumentBackend for release → receipt.

    The receipt is built by its own DocumentBuilder, not by the release's.
    It books through the resource_backend given here; when none is given,
    through FLOWMAN['RESOURCE_BACKEND'], even if the release's builder was
    handed a different one.
    """

    def __init__(self, resource_backend=None):
        self.resource_backend = resource_backend

    def should_build_connected_document(self, document) -> bool:
        if document.type != DocumentType.RELEASE or not document.is_accepted:
            return False
        if document.linked_document_id is not None:
            return False
        location = document.location_from
        return location is not None and location.receipt_location_id is not None

    def build_connected_document(self, document, in_build: bool):
        from flowman.builder import DocumentBuilder

        builder = (
            DocumentBuilder(
                user=document.user,
                resource_backend=self.resource_backend,
                connected_document_backend=self,
            )
            .receipt(document.location_from.receipt_location)
            .set_field('description', f"Gerado a partir de {document}")
            .set_accepted()
        )
        for position in document.position_list:
            builder.add_position(
                position.product,
                position.quantity,
                given_quantity=position.given_quantity,
                given_unit=position.given_unit,
                conversion=position.conversion,
                price=position.price,
                batch=position.batch,
                production_date=position.production_date,
                expiration_date=position.expiration_date,
            )

        if in_build:
            receipt = builder.build_or_raise()
        else:
            receipt = builder.build()

        if not receipt.is_valid:
            logger.warning(
                "document.connected.invalid",
                extra={
                    "document_id": document.pk,
                    "errors": receipt.errors,
                },
            )
            return None

        document.linked_document = receipt
        document.save(update_fields=['linked_document', 'updated_at'])
        logger.info(
            "document.connected",
            extra={
                "document_id": document.pk,
                "receipt_id": receipt.pk,
            },
        )
        return receipt
