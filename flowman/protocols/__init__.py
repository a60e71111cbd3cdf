"""
Flowman Protocols.

Defines interfaces for the collaborators a document build relies on.
"""

from flowman.protocols.documents import ConnectedDocumentBackend
from flowman.protocols.resources import ResourceBackend
from flowman.protocols.users import UserProvider

__all__ = [
    "ConnectedDocumentBackend",
    "ResourceBackend",
    "UserProvider",
]
