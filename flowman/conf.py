"""
Flowman configuration.

Usage in settings.py:
    FLOWMAN = {
        "RESOURCE_BACKEND": "flowman.adapters.ledger.LedgerResourceBackend",
        "CONNECTED_DOCUMENT_BACKEND": "flowman.adapters.connected.ReleaseReceiptBackend",
        "USER_PROVIDER": "flowman.adapters.users.RequestUserProvider",
        "FIFO_BY_EXPIRATION": True,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class FlowmanSettings:
    """Flowman configuration settings."""

    # Books accepted documents into stock (dotted path)
    RESOURCE_BACKEND: str = "flowman.adapters.ledger.LedgerResourceBackend"

    # Builds linked "PZ" receipts for releases (dotted path)
    CONNECTED_DOCUMENT_BACKEND: str = "flowman.adapters.noop.NoopConnectedDocumentBackend"

    # Resolves the user of documents built without an explicit user (dotted path)
    USER_PROVIDER: str = "flowman.adapters.users.RequestUserProvider"

    # Outbound FIFO picks lots expiring first before falling back to age
    FIFO_BY_EXPIRATION: bool = True


def get_flowman_settings() -> FlowmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "FLOWMAN", {})
    return FlowmanSettings(**{
        k: v for k, v in user_settings.items()
        if k in FlowmanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_flowman_settings(), name)


flowman_settings = _LazySettings()
