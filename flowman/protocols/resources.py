"""
Resource Backend Protocol — Interface for booking accepted documents.

Flowman calls this protocol once per accepted, valid document. The
default implementation books into the Resource/Move ledger; a host
project can plug in an external WMS instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flowman.models import Document


@runtime_checkable
class ResourceBackend(Protocol):
    """
    Protocol for materializing stock from accepted documents.

    Implementations:
        - LedgerResourceBackend: Resource/Move ledger (default)
    """

    def create_resources(self, document: Document) -> None:
        """
        Book the document's positions into stock.

        Args:
            document: Saved, accepted document. Its positions are
                available as document.position_list.

        Raises:
            StockError: When stock can't be booked (e.g. insufficient
                quantity for an outbound document)
        """
        ...
