"""
Flowman Adapters.

Implementations of protocols, and the settings-driven loading of them.
"""

from flowman.adapters.loading import (
    get_connected_document_backend,
    get_resource_backend,
    get_user_provider,
    load_backend,
    reset_backends,
)

__all__ = [
    "get_connected_document_backend",
    "get_resource_backend",
    "get_user_provider",
    "load_backend",
    "reset_backends",
]
