"""
Backend loading — resolves the collaborators configured in settings.

Usage:
    from flowman.adapters import get_resource_backend

    backend = get_resource_backend()
    backend.create_resources(document)

Settings:
    FLOWMAN = {
        "RESOURCE_BACKEND": "flowman.adapters.ledger.LedgerResourceBackend",
        "CONNECTED_DOCUMENT_BACKEND": "flowman.adapters.connected.ReleaseReceiptBackend",
        "USER_PROVIDER": "flowman.adapters.users.RequestUserProvider",
    }

An empty or unimportable path raises ImproperlyConfigured.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from flowman.conf import flowman_settings

if TYPE_CHECKING:
    from flowman.protocols import ConnectedDocumentBackend, ResourceBackend, UserProvider

logger = logging.getLogger(__name__)


# Cached instances, keyed by dotted path
_lock = threading.Lock()
_backends: dict[str, Any] = {}


def load_backend(setting_name: str) -> Any:
    """
    Return the instance configured under FLOWMAN[setting_name].

    Raises:
        ImproperlyConfigured: If the setting is empty or import fails
    """
    path = getattr(flowman_settings, setting_name)

    if not path:
        raise ImproperlyConfigured(
            f"FLOWMAN['{setting_name}'] must be configured."
        )

    backend = _backends.get(path)
    if backend is None:
        with _lock:
            backend = _backends.get(path)
            if backend is None:  # double-checked
                try:
                    backend_class = import_string(path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import FLOWMAN['{setting_name}'] '{path}': {e}"
                    ) from e
                backend = backend_class()
                _backends[path] = backend
                logger.debug("Loaded %s: %s", setting_name, path)

    return backend


def get_resource_backend() -> ResourceBackend:
    """Return the configured resource backend."""
    return load_backend("RESOURCE_BACKEND")


def get_connected_document_backend() -> ConnectedDocumentBackend:
    """Return the configured connected document backend."""
    return load_backend("CONNECTED_DOCUMENT_BACKEND")


def get_user_provider() -> UserProvider:
    """Return the configured user provider."""
    return load_backend("USER_PROVIDER")


def reset_backends() -> None:
    """Reset the cached instances. Useful for testing."""
    with _lock:
        _backends.clear()
