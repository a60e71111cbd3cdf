"""
Flowman Models.

Core models for material flow documents:
- Location: Where stock exists (with StorageLocation slots and PalletNumber labels)
- Document: Movement record (receipt, release, transfer, ...)
- Position: Document line
- Resource: Stock lot materialized by accepted documents
- Move: Immutable ledger of resource changes
"""

from flowman.models.document import Document
from flowman.models.enums import (
    INBOUND_TYPES,
    OUTBOUND_TYPES,
    DocumentState,
    DocumentType,
    LocationKind,
)
from flowman.models.location import Location, PalletNumber, StorageLocation
from flowman.models.move import Move
from flowman.models.position import Position
from flowman.models.resource import Resource

__all__ = [
    'LocationKind',
    'DocumentType',
    'DocumentState',
    'INBOUND_TYPES',
    'OUTBOUND_TYPES',
    'Location',
    'StorageLocation',
    'PalletNumber',
    'Document',
    'Position',
    'Resource',
    'Move',
]
