"""
Document model — A warehouse movement record.
"""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from flowman.models.base import ValidatedModel
from flowman.models.enums import (
    INBOUND_TYPES,
    OUTBOUND_TYPES,
    DocumentState,
    DocumentType,
)


class Document(ValidatedModel):
    """
    Stock movement document (receipt, release, transfer, ...).

    Documents are assembled with DocumentBuilder, never field by field:

        builder.receipt(deposito).add_position(farinha, Decimal('10')).set_accepted().build()

    Rules:
    - Created as DRAFT; becomes ACCEPTED only explicitly
    - Only ACCEPTED documents affect stock (Resource/Move)
    """

    number = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name=_('Número'),
    )
    type = models.CharField(
        max_length=20,
        choices=DocumentType.choices,
        default='',
        verbose_name=_('Tipo'),
    )
    state = models.CharField(
        max_length=20,
        choices=DocumentState.choices,
        default=DocumentState.DRAFT,
        db_index=True,
        verbose_name=_('Estado'),
    )
    location_from = models.ForeignKey(
        'flowman.Location',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='outbound_documents',
        verbose_name=_('Local de origem'),
    )
    location_to = models.ForeignKey(
        'flowman.Location',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='inbound_documents',
        verbose_name=_('Local de destino'),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Usuário'),
    )
    time = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        verbose_name=_('Data/Hora'),
    )
    description = models.TextField(
        blank=True,
        default='',
        verbose_name=_('Descrição'),
    )
    linked_document = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='source_documents',
        verbose_name=_('Documento vinculado'),
        help_text=_('Recebimento gerado automaticamente a partir desta liberação'),
    )
    metadata = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_('Metadados'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Documento')
        verbose_name_plural = _('Documentos')
        ordering = ['-time']
        indexes = [
            models.Index(fields=['type', 'state'], name='flowman_doc_type_state_idx'),
        ]

    # ══════════════════════════════════════════════════════════════
    # PROPERTIES
    # ══════════════════════════════════════════════════════════════

    @property
    def is_accepted(self) -> bool:
        return self.state == DocumentState.ACCEPTED

    @property
    def is_inbound(self) -> bool:
        return self.type in INBOUND_TYPES

    @property
    def is_outbound(self) -> bool:
        return self.type in OUTBOUND_TYPES

    @property
    def is_transfer(self) -> bool:
        return self.type == DocumentType.TRANSFER

    @property
    def stock_location(self):
        """Location whose storage slots the positions refer to."""
        if self.is_outbound:
            return self.location_from
        return self.location_to

    @property
    def position_list(self) -> list:
        """
        Positions attached by the builder, in call order.

        Falls back to the stored positions for documents loaded from the
        database.
        """
        attached = self.__dict__.get('_position_list')
        if attached is not None:
            return attached
        if self.pk is None:
            return []
        return list(self.positions.all())

    @position_list.setter
    def position_list(self, positions) -> None:
        self._position_list = list(positions)

    # ══════════════════════════════════════════════════════════════
    # VALIDATION
    # ══════════════════════════════════════════════════════════════

    def clean(self):
        errors = {}

        if self.type in INBOUND_TYPES and self.location_to_id is None:
            errors['location_to'] = _('Local de destino é obrigatório para este tipo de documento')

        if self.type in OUTBOUND_TYPES and self.location_from_id is None:
            errors['location_from'] = _('Local de origem é obrigatório para este tipo de documento')

        if self.type == DocumentType.TRANSFER:
            if self.location_to_id is None:
                errors['location_to'] = _('Local de destino é obrigatório para transferências')
            if self.location_from_id is None:
                errors['location_from'] = _('Local de origem é obrigatório para transferências')
            elif self.location_from_id == self.location_to_id:
                errors['location_to'] = _('Origem e destino devem ser diferentes')

        if errors:
            raise ValidationError(errors)

    def __str__(self) -> str:
        label = self.number or (f"#{self.pk}" if self.pk else _('novo'))
        return f"{self.get_type_display()} {label} ({self.get_state_display()})"
