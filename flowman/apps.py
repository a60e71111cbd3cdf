"""Django app configuration for Flowman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class FlowmanConfig(AppConfig):
    """Configuration for Flowman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "flowman"
    verbose_name = _("Documentos de Estoque")
