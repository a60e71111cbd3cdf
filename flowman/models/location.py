"""
Location models — Where stock exists.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from flowman.models.enums import LocationKind


class Location(models.Model):
    """
    Warehouse location — source or target of documents.

    Locations are stable entities, created during system setup.

    Examples:
        Location.objects.create(code='deposito', name='Depósito', kind=LocationKind.PHYSICAL)
        Location.objects.create(code='loja', name='Loja', receipt_location=deposito)
    """

    code = models.SlugField(
        unique=True,
        max_length=50,
        verbose_name=_('Código'),
        help_text=_('Identificador único (ex: deposito, loja)'),
    )
    name = models.CharField(
        max_length=100,
        verbose_name=_('Nome'),
        help_text=_('Nome legível do local'),
    )
    kind = models.CharField(
        max_length=20,
        choices=LocationKind.choices,
        default=LocationKind.PHYSICAL,
        verbose_name=_('Tipo'),
    )
    receipt_location = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Local de recebimento'),
        help_text=_('Se preenchido, liberações deste local geram um recebimento vinculado lá.'),
    )
    metadata = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_('Metadados'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Local')
        verbose_name_plural = _('Locais')
        ordering = ['code']

    def __str__(self) -> str:
        return self.name


class StorageLocation(models.Model):
    """Slot (shelf, rack, bin) inside a location."""

    location = models.ForeignKey(
        Location,
        on_delete=models.CASCADE,
        related_name='storage_locations',
        verbose_name=_('Local'),
    )
    number = models.CharField(
        max_length=50,
        verbose_name=_('Número'),
    )

    class Meta:
        verbose_name = _('Endereço de armazenagem')
        verbose_name_plural = _('Endereços de armazenagem')
        ordering = ['location', 'number']
        constraints = [
            models.UniqueConstraint(
                fields=['location', 'number'],
                name='unique_storage_location_number',
            )
        ]

    def __str__(self) -> str:
        return f"{self.location.code}/{self.number}"


class PalletNumber(models.Model):
    """Pallet identifier printed on the pallet label."""

    number = models.CharField(
        max_length=50,
        unique=True,
        verbose_name=_('Número'),
    )

    class Meta:
        verbose_name = _('Número de palete')
        verbose_name_plural = _('Números de palete')
        ordering = ['number']

    def __str__(self) -> str:
        return self.number
