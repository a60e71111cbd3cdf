"""
Noop Connected Document Backend — never builds connected documents.

This is the default CONNECTED_DOCUMENT_BACKEND: releases stay releases
unless the host project opts into ReleaseReceiptBackend.

Usage in settings.py:
    FLOWMAN = {
        "CONNECTED_DOCUMENT_BACKEND": "flowman.adapters.noop.NoopConnectedDocumentBackend",
    }
"""

from __future__ import annotations


class NoopConnectedDocumentBackend:
    """Implements ConnectedDocumentBackend without building anything."""

    def should_build_connected_document(self, document) -> bool:
        return False

    def build_connected_document(self, document, in_build: bool):
        return None
