"""
Flowman Admin.

Documents are built by DocumentBuilder, so the admin is read-only for
them and for the ledger:
- Location / StorageLocation / PalletNumber: list + edit
- Document: read-only with positions inline
- Resource: read-only (product, location, lot, quantity)
- Move: read-only audit trail
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from flowman.models import Document, Location, Move, PalletNumber, Position, Resource, StorageLocation


class ReadOnlyAdminMixin:
    """No add/change/delete from the admin."""

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# LOCATION ADMIN
# =========================================================================

class StorageLocationInline(admin.TabularInline):
    model = StorageLocation
    extra = 0


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    """Location admin — editable."""

    list_display = ['code', 'name', 'kind', 'receipt_location']
    list_filter = ['kind']
    search_fields = ['code', 'name']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [StorageLocationInline]


@admin.register(PalletNumber)
class PalletNumberAdmin(admin.ModelAdmin):
    list_display = ['number']
    search_fields = ['number']


# =========================================================================
# DOCUMENT ADMIN (read-only)
# =========================================================================

class PositionInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = Position
    extra = 0
    fields = ['number', 'product_display', 'quantity', 'given_quantity', 'given_unit',
              'price', 'batch', 'expiration_date', 'resource', 'storage_location']
    readonly_fields = fields

    @admin.display(description=_('Produto'))
    def product_display(self, obj):
        return str(obj.product) if obj.product else '?'


@admin.register(Document)
class DocumentAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """Document admin — read-only. Documents only change via DocumentBuilder."""

    list_display = ['__str__', 'type', 'state', 'location_from', 'location_to', 'user', 'time']
    list_filter = ['type', 'state', 'time']
    search_fields = ['number', 'description']
    date_hierarchy = 'time'
    inlines = [PositionInline]


# =========================================================================
# LEDGER ADMIN (read-only)
# =========================================================================

@admin.register(Resource)
class ResourceAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """Resource admin — read-only. Stock only changes via accepted documents."""

    list_display = ['__str__', 'location', 'batch', 'expiration_date', 'quantity_display', 'document']
    list_filter = ['location', 'expiration_date']
    search_fields = ['batch', 'object_id']

    @admin.display(description=_('Quantidade'))
    def quantity_display(self, obj):
        return obj.quantity


@admin.register(Move)
class MoveAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """Move admin — read-only. Immutable audit trail."""

    list_display = ['timestamp', 'resource', 'delta', 'reason', 'user']
    list_filter = ['timestamp', 'user']
    search_fields = ['reason']
    date_hierarchy = 'timestamp'
