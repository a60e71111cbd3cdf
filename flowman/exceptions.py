"""
Exceptions for Flowman.

All errors are FlowError subclasses with a structured code for
programmatic handling.
"""

from decimal import Decimal
from typing import Any


class FlowError(Exception):
    """
    Base structured error.

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }


class StockError(FlowError):
    """
    Ledger errors raised while booking resources.

    Usage:
        try:
            StockMovements.issue(Decimal('10'), resource)
        except StockError as e:
            if e.code == 'INSUFFICIENT_QUANTITY':
                print(f"Só tem {e.available} disponível")
    """

    _default_messages = {
        'INSUFFICIENT_QUANTITY': 'Quantidade insuficiente no estoque',
        'INVALID_QUANTITY': 'Quantidade inválida (deve ser positiva)',
        'REASON_REQUIRED': 'Motivo é obrigatório',
    }

    @property
    def available(self) -> Decimal:
        """Shortcut for data['available']."""
        return self.data.get('available', Decimal('0'))

    @property
    def requested(self) -> Decimal:
        """Shortcut for data['requested']."""
        return self.data.get('requested', Decimal('0'))


class DocumentError(FlowError):
    """Misuse of the document builder (missing arguments, reuse)."""

    _default_messages = {
        'PRODUCT_REQUIRED': 'Produto é obrigatório',
        'QUANTITY_REQUIRED': 'Quantidade é obrigatória',
        'POSITION_REQUIRED': 'Posição é obrigatória',
        'USER_REQUIRED': 'Usuário é obrigatório',
        'ALREADY_BUILT': 'Documento já foi construído',
        'INVALID_DOCUMENT': 'Documento inválido',
    }


class DocumentBuildError(DocumentError):
    """
    Raised by DocumentBuilder.build_or_raise() when the document or any
    of its positions fails validation.

    Usage:
        try:
            builder.build_or_raise()
        except DocumentBuildError as e:
            for position in e.invalid_positions:
                print(position.errors)
    """

    def __init__(self, document, invalid_positions=None, message=None):
        self.document = document
        self.invalid_positions = list(invalid_positions or [])
        super().__init__(
            'INVALID_DOCUMENT',
            message,
            errors=list(document.errors),
            invalid_positions=len(self.invalid_positions),
        )
