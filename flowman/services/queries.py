"""
Stock queries — read-only ledger lookups.
"""

from decimal import Decimal

from django.db.models import Sum
from django.db.models.functions import Coalesce

from flowman.models.resource import Resource


class StockQueries:
    """Read-only stock query methods."""

    @classmethod
    def quantity(cls, product, location=None) -> Decimal:
        """
        Quantity of product in stock.

        Args:
            product: Product object
            location: Restrict to one location (None = all locations)
        """
        qs = Resource.objects.for_product(product)
        if location is not None:
            qs = qs.at_location(location)

        return qs.aggregate(
            t=Coalesce(Sum('_quantity'), Decimal('0'))
        )['t']
