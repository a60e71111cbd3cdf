"""
Position model — One line item of a document.
"""

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from flowman.models.base import ValidatedModel


class Position(ValidatedModel):
    """
    Document line: product, quantity and lot attributes.

    Quantities:
    - quantity: in the product's base unit (what stock is booked in)
    - given_quantity/given_unit: as entered by the user (e.g. boxes)
    - conversion: given_unit -> base unit factor

    Positions are created standalone and bound to a document by
    DocumentBuilder.build().
    """

    document = models.ForeignKey(
        'flowman.Document',
        on_delete=models.CASCADE,
        related_name='positions',
        verbose_name=_('Documento'),
    )
    number = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Número'),
        help_text=_('Ordem da posição no documento'),
    )

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

    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Quantidade'),
    )
    given_quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        null=True,
        blank=True,
        verbose_name=_('Quantidade informada'),
    )
    given_unit = models.CharField(
        max_length=20,
        blank=True,
        default='',
        verbose_name=_('Unidade informada'),
    )
    conversion = models.DecimalField(
        max_digits=12,
        decimal_places=5,
        null=True,
        blank=True,
        verbose_name=_('Conversão'),
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Preço'),
    )

    # Lot attributes
    batch = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name=_('Lote'),
    )
    production_date = models.DateField(
        null=True,
        blank=True,
        verbose_name=_('Data de Produção'),
    )
    expiration_date = models.DateField(
        null=True,
        blank=True,
        verbose_name=_('Data de Validade'),
    )
    resource = models.ForeignKey(
        'flowman.Resource',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='positions',
        verbose_name=_('Recurso'),
        help_text=_('Saídas: lote específico. Entradas: preenchido ao aceitar.'),
    )

    # Storage attributes
    storage_location = models.ForeignKey(
        'flowman.StorageLocation',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='positions',
        verbose_name=_('Endereço de armazenagem'),
    )
    pallet_number = models.ForeignKey(
        'flowman.PalletNumber',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='positions',
        verbose_name=_('Número de palete'),
    )
    type_of_pallet = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name=_('Tipo de palete'),
    )
    additional_code = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name=_('Código adicional'),
    )
    waste = models.BooleanField(
        default=False,
        verbose_name=_('Resíduo'),
    )

    class Meta:
        verbose_name = _('Posição')
        verbose_name_plural = _('Posições')
        ordering = ['document', 'number', 'id']
        indexes = [
            models.Index(fields=['content_type', 'object_id'], name='flowman_pos_product_idx'),
        ]

    def clean(self):
        errors = {}

        if self.quantity is not None and self.quantity <= 0:
            errors['quantity'] = _('Quantidade deve ser positiva')

        if self.given_quantity is not None and self.given_quantity <= 0:
            errors['given_quantity'] = _('Quantidade informada deve ser positiva')

        if self.conversion is not None and self.conversion <= 0:
            errors['conversion'] = _('Conversão deve ser positiva')

        if self.price is not None and self.price < 0:
            errors['price'] = _('Preço não pode ser negativo')

        if (self.production_date and self.expiration_date
                and self.expiration_date < self.production_date):
            errors['expiration_date'] = _('Validade anterior à data de produção')

        # RelatedObjectDoesNotExist is an AttributeError
        document = getattr(self, 'document', None)
        if document is not None:
            errors.update(self._clean_against_document(document))

        if errors:
            raise ValidationError(errors)

    def _clean_against_document(self, document) -> dict:
        errors = {}

        location = document.stock_location
        if self.storage_location_id is not None and location is not None:
            if self.storage_location.location_id != location.pk:
                errors['storage_location'] = _('Endereço não pertence ao local do documento')

        if self.resource_id is not None:
            resource = self.resource
            same_product = (
                resource.content_type_id == self.content_type_id
                and resource.object_id == self.object_id
            )
            if not same_product:
                errors['resource'] = _('Recurso é de outro produto')
            elif document.location_from_id is not None and resource.location_id != document.location_from_id:
                errors['resource'] = _('Recurso não está no local de origem')

        return errors

    def __str__(self) -> str:
        unit = f" {self.given_unit}" if self.given_unit else ""
        return f"{self.number}. {self.product}: {self.quantity}{unit}"
