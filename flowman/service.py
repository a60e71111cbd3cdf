"""
Documents Service — The single public entry point for building documents.

Usage:
    from flowman import documents

    documents.receipt(deposito, user=user).add_position(farinha, Decimal('25')).build()
    documents.release(loja).add_position(pao, Decimal('3')).set_accepted().build()
"""

from flowman.builder import DocumentBuilder


class Documents:
    """
    Factory of DocumentBuilders.

    Parameter convention: (location(s), user=None)
    Follows the movement: "Release from loja", "Transfer to loja from deposito"
    """

    @classmethod
    def builder(cls, user=None, **collaborators) -> DocumentBuilder:
        """
        New builder for the given user (None = current user).

        Args:
            collaborators: user_provider, resource_backend,
                connected_document_backend overrides
        """
        return DocumentBuilder(user=user, **collaborators)

    @classmethod
    def receipt(cls, location_to, user=None) -> DocumentBuilder:
        return cls.builder(user).receipt(location_to)

    @classmethod
    def internal_inbound(cls, location_to, user=None) -> DocumentBuilder:
        return cls.builder(user).internal_inbound(location_to)

    @classmethod
    def internal_outbound(cls, location_from, user=None) -> DocumentBuilder:
        return cls.builder(user).internal_outbound(location_from)

    @classmethod
    def transfer(cls, location_to, location_from, user=None) -> DocumentBuilder:
        return cls.builder(user).transfer(location_to, location_from)

    @classmethod
    def release(cls, location_from, user=None) -> DocumentBuilder:
        return cls.builder(user).release(location_from)

    @classmethod
    def returned(cls, location_to, user=None) -> DocumentBuilder:
        return cls.builder(user).returned(location_to)
