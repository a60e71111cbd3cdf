"""
Django Flowman — Material flow documents.

Receipts, releases, transfers: documents with positions that book stock
when accepted.

Uso:
    from flowman import documents, DocumentBuildError

    document = (
        documents.receipt(deposito, user=user)
        .add_position(farinha, Decimal('25'), batch='L-0423')
        .set_accepted()
        .build()
    )
    document.is_valid  # True
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'documents':
        from flowman.service import Documents
        return Documents
    elif name == 'DocumentBuilder':
        from flowman.builder import DocumentBuilder
        return DocumentBuilder
    elif name == 'PositionAttributes':
        from flowman.builder import PositionAttributes
        return PositionAttributes
    elif name == 'UnitOfWork':
        from flowman.transaction import UnitOfWork
        return UnitOfWork
    elif name in ('FlowError', 'StockError', 'DocumentError', 'DocumentBuildError'):
        from flowman import exceptions
        return getattr(exceptions, name)
    elif name in ('Document', 'Position', 'Location', 'Resource', 'Move',
                  'DocumentType', 'DocumentState'):
        from flowman import models
        return getattr(models, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'documents',
    'DocumentBuilder',
    'PositionAttributes',
    'UnitOfWork',
    'FlowError',
    'StockError',
    'DocumentError',
    'DocumentBuildError',
    'Document',
    'Position',
    'Location',
    'Resource',
    'Move',
    'DocumentType',
    'DocumentState',
]

__version__ = '0.1.0'
