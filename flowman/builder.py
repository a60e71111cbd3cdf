"""
DocumentBuilder — assembles a document with its positions and saves them.

Usage:
    from flowman import documents

    document = (
        documents.builder(user=request.user)
        .receipt(deposito)
        .add_position(farinha, Decimal('25'), batch='L-0423', price=Decimal('4.90'))
        .set_accepted()
        .build()
    )

    if not document.is_valid:
        # Nothing was kept: the build's unit of work was rolled back
        print(document.errors)

build() never raises on validation failures; the caller must check
document.is_valid. build_or_raise() raises DocumentBuildError instead.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Callable

from django.core.exceptions import FieldDoesNotExist
from django.utils import timezone

from flowman.adapters.loading import (
    get_connected_document_backend,
    get_resource_backend,
    get_user_provider,
)
from flowman.exceptions import DocumentBuildError, DocumentError
from flowman.models.document import Document
from flowman.models.enums import DocumentState, DocumentType
from flowman.models.position import Position
from flowman.transaction import UnitOfWork

logger = logging.getLogger('flowman')


@dataclass(frozen=True)
class PositionAttributes:
    """Optional attributes of a position, all keyword arguments of add_position()."""

    # Quantity as entered by the user, in given_unit. Default: quantity
    given_quantity: Decimal | None = None
    # Unit of given_quantity. Default: product.unit
    given_unit: str | None = None
    # Factor from given_unit to the base unit
    conversion: Decimal | None = None
    # Unit price; copied onto the lot of inbound documents
    price: Decimal | None = None
    # Lot code
    batch: str | None = None
    production_date: date | None = None
    # Lots expiring first are issued first
    expiration_date: date | None = None
    # Outbound: issue from this lot instead of FIFO
    resource: Any = None
    # Slot inside the document's location
    storage_location: Any = None
    pallet_number: Any = None
    type_of_pallet: str | None = None
    additional_code: str | None = None
    # Line is waste (scrap, spoilage)
    waste: bool = False


def _product_unit(product) -> str:
    return getattr(product, 'unit', None) or ''


@dataclass
class _BuildContext:
    document: Document
    invalid_positions: list[Position] = field(default_factory=list)
    unit_of_work: UnitOfWork | None = None


def _mark_rollback_only(context: _BuildContext) -> None:
    context.unit_of_work.mark_rollback_only()


def _raise_build_error(context: _BuildContext) -> None:
    context.unit_of_work.mark_rollback_only()
    raise DocumentBuildError(context.document, context.invalid_positions)


class DocumentBuilder:
    """
    Fluent, single-use builder of one Document.

    Parameter convention follows the movement: receipt(to), release(from),
    transfer(to, from). Movement setters overwrite each other; the last
    call wins.
    """

    def __init__(self, user=None, *, user_provider=None,
                 resource_backend=None, connected_document_backend=None):
        """
        Args:
            user: Author of the document. None = ask the user provider
            user_provider: UserProvider (default: FLOWMAN['USER_PROVIDER'])
            resource_backend: ResourceBackend (default: FLOWMAN['RESOURCE_BACKEND'])
            connected_document_backend: ConnectedDocumentBackend
                (default: FLOWMAN['CONNECTED_DOCUMENT_BACKEND'])

        Raises:
            DocumentError('USER_REQUIRED'): If no user can be determined
        """
        if user is None:
            provider = user_provider or get_user_provider()
            user = provider.current_user()
        if user is None:
            raise DocumentError('USER_REQUIRED')

        self._resource_backend = resource_backend
        self._connected_document_backend = connected_document_backend
        self._positions: list[Position] = []
        self._built = False
        self._document = self._create_document(user)

    @staticmethod
    def _create_document(user) -> Document:
        document = Document(
            user=user,
            time=timezone.now(),
            state=DocumentState.DRAFT,
        )
        document.position_list = []
        return document

    # ══════════════════════════════════════════════════════════════
    # COLLABORATORS
    # ══════════════════════════════════════════════════════════════

    @property
    def resource_backend(self):
        if self._resource_backend is None:
            self._resource_backend = get_resource_backend()
        return self._resource_backend

    @property
    def connected_document_backend(self):
        if self._connected_document_backend is None:
            self._connected_document_backend = get_connected_document_backend()
        return self._connected_document_backend

    # ══════════════════════════════════════════════════════════════
    # DOCUMENT
    # ══════════════════════════════════════════════════════════════

    @property
    def document(self) -> Document:
        return self._document

    @property
    def document_type(self) -> DocumentType | None:
        if not self._document.type:
            return None
        return DocumentType(self._document.type)

    @property
    def positions(self) -> list[Position]:
        """Positions added so far, in call order (a copy)."""
        return list(self._positions)

    def receipt(self, location_to):
        self._set_movement(DocumentType.RECEIPT, location_to=location_to)
        return self

    def internal_outbound(self, location_from):
        self._set_movement(DocumentType.INTERNAL_OUTBOUND, location_from=location_from)
        return self

    def internal_inbound(self, location_to):
        self._set_movement(DocumentType.INTERNAL_INBOUND, location_to=location_to)
        return self

    def transfer(self, location_to, location_from):
        self._set_movement(DocumentType.TRANSFER, location_to=location_to, location_from=location_from)
        return self

    def release(self, location_from):
        self._set_movement(DocumentType.RELEASE, location_from=location_from)
        return self

    def returned(self, location_to):
        self._set_movement(DocumentType.RETURN, location_to=location_to)
        return self

    def _set_movement(self, document_type, **locations):
        for name, location in locations.items():
            setattr(self._document, name, location)
        self._document.type = document_type

    def set_accepted(self):
        self._document.state = DocumentState.ACCEPTED
        return self

    def set_field(self, name: str, value):
        """
        Set a document field by name.

        Names that are not concrete Document fields (e.g. values added by
        host projects) are stored in document.metadata.
        """
        try:
            model_field = self._document._meta.get_field(name)
        except FieldDoesNotExist:
            model_field = None

        if model_field is not None and model_field.concrete:
            setattr(self._document, model_field.name, value)
        else:
            self._document.metadata[name] = value
        return self

    # ══════════════════════════════════════════════════════════════
    # POSITIONS
    # ══════════════════════════════════════════════════════════════

    def add_position(self, product, quantity, **attributes):
        """
        Add a position.

        Args:
            product: Any saved model instance; product.unit is the base unit
            quantity: Quantity in the base unit
            attributes: PositionAttributes fields

        Raises:
            DocumentError('PRODUCT_REQUIRED' | 'QUANTITY_REQUIRED')
            TypeError: On unknown attribute names
        """
        position = self.create_position(product, quantity, **attributes)
        self._positions.append(position)
        return self

    def create_position(self, product, quantity, **attributes) -> Position:
        """Create an unsaved position without adding it to the document."""
        if product is None:
            raise DocumentError('PRODUCT_REQUIRED')
        if quantity is None:
            raise DocumentError('QUANTITY_REQUIRED')

        attrs = PositionAttributes(**attributes)

        return Position(
            product=product,
            quantity=quantity,
            given_quantity=quantity if attrs.given_quantity is None else attrs.given_quantity,
            given_unit=_product_unit(product) if attrs.given_unit is None else attrs.given_unit,
            conversion=attrs.conversion,
            price=attrs.price,
            batch=attrs.batch or '',
            production_date=attrs.production_date,
            expiration_date=attrs.expiration_date,
            resource=attrs.resource,
            storage_location=attrs.storage_location,
            pallet_number=attrs.pallet_number,
            type_of_pallet=attrs.type_of_pallet or '',
            additional_code=attrs.additional_code or '',
            waste=attrs.waste,
        )

    def append_position(self, position: Position):
        """
        Add a previously created position.

        Raises:
            DocumentError('POSITION_REQUIRED'): If position is None
        """
        if position is None:
            raise DocumentError('POSITION_REQUIRED')

        self._positions.append(position)
        return self

    # ══════════════════════════════════════════════════════════════
    # BUILD
    # ══════════════════════════════════════════════════════════════

    def build(self, unit_of_work: UnitOfWork | None = None) -> Document:
        """
        Save the document and its positions; book stock if accepted.

        Invalid documents are returned, not raised: the unit of work is
        marked rollback-only and document.is_valid is False.

        Args:
            unit_of_work: Transaction to run in. None = a new one

        Returns:
            The saved document (check is_valid)
        """
        return self._build_with_invalid_strategy(_mark_rollback_only, unit_of_work)

    def build_or_raise(self, unit_of_work: UnitOfWork | None = None) -> Document:
        """
        Like build(), but invalid documents raise.

        Raises:
            DocumentBuildError: With the invalid document and positions
        """
        return self._build_with_invalid_strategy(_raise_build_error, unit_of_work)

    def _build_with_invalid_strategy(self, strategy: Callable[[_BuildContext], None],
                                     unit_of_work: UnitOfWork | None) -> Document:
        if self._built:
            raise DocumentError('ALREADY_BUILT')
        self._built = True

        if unit_of_work is None:
            unit_of_work = UnitOfWork()

        if unit_of_work.active:
            return self._assemble(strategy, unit_of_work)

        with unit_of_work:
            return self._assemble(strategy, unit_of_work)

    def _assemble(self, strategy, unit_of_work) -> Document:
        document = self._document.save_validated()

        for number, position in enumerate(self._positions, start=1):
            position.document = document
            position.number = number
        document.position_list = self._positions

        invalid_positions = []
        if document.is_valid:
            invalid_positions = self._save_positions(document)

            if document.is_valid and document.is_accepted:
                self.resource_backend.create_resources(document)

                backend = self.connected_document_backend
                if backend.should_build_connected_document(document):
                    backend.build_connected_document(document, False)

        if not document.is_valid:
            logger.info(
                "document.invalid",
                extra={
                    "type": document.type,
                    "errors": document.errors,
                    "invalid_positions": len(invalid_positions),
                },
            )
            strategy(_BuildContext(document, invalid_positions, unit_of_work))
            return document

        logger.info(
            "document.built",
            extra={
                "document_id": document.pk,
                "type": document.type,
                "state": document.state,
                "positions": len(self._positions),
            },
        )
        return document

    def _save_positions(self, document) -> list[Position]:
        invalid = []
        for position in self._positions:
            position.save_validated()
            if not position.is_valid:
                invalid.append(position)
                document.set_not_valid()
                for message in position.errors:
                    document.add_error(message)
        return invalid
