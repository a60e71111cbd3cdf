"""
Connected Document Protocol — Interface for documents generated from others.

Typical case: a release (WZ) from a shop's supplying warehouse produces a
receipt (PZ) in the shop. Flowman asks the backend after booking an
accepted document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flowman.models import Document


@runtime_checkable
class ConnectedDocumentBackend(Protocol):
    """
    Protocol for building connected documents.

    Implementations:
        - ReleaseReceiptBackend: receipt in location_from.receipt_location
        - NoopConnectedDocumentBackend: never builds anything (default)
    """

    def should_build_connected_document(self, document: Document) -> bool:
        """
        Does this document need a connected document?

        Args:
            document: Saved, accepted document

        Returns:
            True if build_connected_document() should be called
        """
        ...

    def build_connected_document(self, document: Document, in_build: bool) -> Document | None:
        """
        Build the connected document.

        Args:
            document: Saved, accepted source document
            in_build: True when called from inside a document build; an
                invalid connected document must then raise
                DocumentBuildError instead of being dropped

        Returns:
            The connected document, or None if it could not be built
        """
        ...
