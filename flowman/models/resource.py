"""
Resource model — Stock lot materialized by accepted documents.
"""

import logging
from decimal import Decimal

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.db.models import F, Sum
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger('flowman')


class ResourceQuerySet(models.QuerySet):
    """QuerySet with helper filters for Resource queries."""

    def for_product(self, product):
        """Filter resources for a specific product."""
        ct = ContentType.objects.get_for_model(product)
        return self.filter(content_type=ct, object_id=product.pk)

    def at_location(self, location):
        """Filter by location."""
        return self.filter(location=location)

    def in_stock(self):
        """Only resources with remaining quantity."""
        return self.filter(_quantity__gt=0)

    def fifo(self, by_expiration: bool = True):
        """
        Picking order for outbound documents.

        Oldest first; with by_expiration, lots expiring first go before
        lots without expiration date.
        """
        if by_expiration:
            return self.order_by(
                F('expiration_date').asc(nulls_last=True),
                'created_at',
                'pk',
            )
        return self.order_by('created_at', 'pk')


class Resource(models.Model):
    """
    Quantity of a product lot at a location.

    Coordinates:
    - location: WHERE
    - batch / storage_location / pallet_number: WHICH lot

    Performance:
    - _quantity is cache updated atomically by Move
    - Use recalculate() for audit/correction
    """

    # Generic reference to product (agnostic)
    content_type = models.ForeignKey(
        ContentType,
        on_delete=models.PROTECT,
        verbose_name=_('Tipo de Produto'),
    )
    object_id = models.PositiveIntegerField(
        verbose_name=_('ID do Produto'),
    )
    product = GenericForeignKey('content_type', 'object_id')

    location = models.ForeignKey(
        'flowman.Location',
        on_delete=models.PROTECT,
        related_name='resources',
        verbose_name=_('Local'),
    )
    storage_location = models.ForeignKey(
        'flowman.StorageLocation',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='resources',
        verbose_name=_('Endereço de armazenagem'),
    )
    pallet_number = models.ForeignKey(
        'flowman.PalletNumber',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='resources',
        verbose_name=_('Número de palete'),
    )
    type_of_pallet = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name=_('Tipo de palete'),
    )
    batch = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name=_('Lote'),
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Preço'),
    )
    production_date = models.DateField(
        null=True,
        blank=True,
        verbose_name=_('Data de Produção'),
    )
    expiration_date = models.DateField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_('Data de Validade'),
    )
    document = models.ForeignKey(
        'flowman.Document',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='resources',
        verbose_name=_('Documento de origem'),
    )

    # Quantity cache (updated atomically by Move)
    _quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Quantidade'),
    )

    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ResourceQuerySet.as_manager()

    class Meta:
        verbose_name = _('Recurso')
        verbose_name_plural = _('Recursos')
        indexes = [
            models.Index(fields=['content_type', 'object_id'], name='flowman_res_product_idx'),
            models.Index(fields=['location', 'content_type', 'object_id'], name='flowman_res_loc_product_idx'),
        ]

    @property
    def quantity(self) -> Decimal:
        """Total quantity — O(1) cache read."""
        return self._quantity

    def recalculate(self) -> Decimal:
        """
        Recalculate quantity from Moves.

        Returns:
            New calculated quantity
        """
        total = self.moves.aggregate(
            t=Coalesce(Sum('delta'), Decimal('0'))
        )['t']

        if total != self._quantity:
            old = self._quantity
            self._quantity = total
            self.save(update_fields=['_quantity', 'updated_at'])
            logger.warning(
                f"Resource {self.pk} recalculated: {old} → {total} "
                f"(diff: {total - old})"
            )

        return total

    def __str__(self) -> str:
        batch = f" [{self.batch}]" if self.batch else ""
        return f"{self.product}{batch} @ {self.location.code}: {self._quantity}"
