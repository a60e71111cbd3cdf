"""
Move model — One booked change of a resource's quantity.

Moves are written by StockMovements while an accepted document is booked:
one Move per resource touched by each position.
"""

from django.conf import settings
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Move(models.Model):
    """
    Ledger entry for a resource.

    A Move is written once and never changed; a wrong booking is undone
    with a new document in the opposite direction. Saving a Move is the
    only way Resource._quantity changes.

    Reason:
        Taken from the caller, or derived from the position's document
        ("Recebimento #12"). A Move without either is refused.
    """

    resource = models.ForeignKey(
        'flowman.Resource',
        on_delete=models.PROTECT,
        related_name='moves',
        verbose_name=_('Recurso'),
    )
    # Positive: stock entered the resource. Negative: stock left it
    delta = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Variação'),
        help_text=_('Positivo = entrada, Negativo = saída'),
    )
    position = models.ForeignKey(
        'flowman.Position',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='moves',
        verbose_name=_('Posição'),
    )
    reason = models.CharField(
        max_length=255,
        verbose_name=_('Motivo'),
        help_text=_('Ex: "Recebimento #12", "Liberação #40"'),
    )
    metadata = models.JSONField(default=dict, blank=True, verbose_name=_('Metadados'))
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        verbose_name=_('Usuário'),
    )

    class Meta:
        verbose_name = _('Movimento')
        verbose_name_plural = _('Movimentos')
        ordering = ['timestamp']
        indexes = [
            models.Index(fields=['resource', 'timestamp'], name='flowman_move_res_ts_idx'),
        ]

    @staticmethod
    def reason_for(document) -> str:
        """Reason of the moves booked for a document, e.g. "Liberação #40"."""
        return f"{document.get_type_display()} #{document.pk}"

    @property
    def document(self):
        """Document whose booking wrote this move, if any."""
        if self.position_id is None:
            return None
        return self.position.document

    @property
    def is_inbound(self) -> bool:
        return self.delta > 0

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError("Movimentos não podem ser alterados")

        if not self.reason and self.position_id is not None:
            self.reason = self.reason_for(self.position.document)
        if not self.reason:
            raise ValueError("Motivo é obrigatório")

        with transaction.atomic():
            super().save(*args, **kwargs)

            from flowman.models.resource import Resource

            Resource.objects.filter(pk=self.resource_id).update(
                _quantity=F('_quantity') + self.delta,
                updated_at=timezone.now(),
            )

    def delete(self, *args, **kwargs):
        raise ValueError("Movimentos não podem ser excluídos")

    def __str__(self) -> str:
        sign = '+' if self.is_inbound else ''
        return f"{sign}{self.delta} {self.resource_id} | {self.reason}"
