"""
Enums for Flowman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class LocationKind(models.TextChoices):
    """
    Type of location in space.

    PHYSICAL: Warehouse or shop floor where product exists in the real world.
    VIRTUAL:  Accounting concept (losses, inventory adjustments).
    """
    PHYSICAL = 'physical', _('Físico')
    VIRTUAL = 'virtual', _('Virtual')


class DocumentType(models.TextChoices):
    """Kind of stock movement a document records."""
    RECEIPT = 'receipt', _('Recebimento')                      # PZ: from supplier into location_to
    INTERNAL_INBOUND = 'internal_inbound', _('Entrada interna')  # PW: e.g. from production
    INTERNAL_OUTBOUND = 'internal_outbound', _('Saída interna')  # RW: e.g. to production
    TRANSFER = 'transfer', _('Transferência')                  # MM: location_from -> location_to
    RELEASE = 'release', _('Liberação')                        # WZ: out to customer
    RETURN = 'return', _('Devolução')                          # back into location_to


class DocumentState(models.TextChoices):
    """Document lifecycle state."""
    DRAFT = 'draft', _('Rascunho')      # Editable, no stock effect
    ACCEPTED = 'accepted', _('Aceito')  # Booked into resources


# Types that bring stock into location_to
INBOUND_TYPES = frozenset({
    DocumentType.RECEIPT,
    DocumentType.INTERNAL_INBOUND,
    DocumentType.RETURN,
})

# Types that take stock out of location_from
OUTBOUND_TYPES = frozenset({
    DocumentType.RELEASE,
    DocumentType.INTERNAL_OUTBOUND,
})
