"""
Stock services — ledger operations behind accepted documents.

    from flowman.services import StockQueries, StockMovements
"""

from flowman.services.movements import StockMovements
from flowman.services.queries import StockQueries

__all__ = [
    'StockQueries',
    'StockMovements',
]
