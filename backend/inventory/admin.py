from django.contrib import admin
from .models import AssetUnit


@admin.register(AssetUnit)
class AssetUnitAdmin(admin.ModelAdmin):
    list_display = ['asset_tag', 'item', 'office_location', 'status', 'updated_at']
    list_filter = ['office_location', 'status', 'item__category']
    search_fields = ['asset_tag', 'item__name']
    ordering = ['asset_tag']
    readonly_fields = ['created_at', 'updated_at']
