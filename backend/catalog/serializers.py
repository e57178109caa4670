from rest_framework import serializers
from .models import CatalogItem


class CatalogItemSerializer(serializers.ModelSerializer):
    category_display = serializers.CharField(source='get_category_display', read_only=True)
    price_per_day_cents = serializers.IntegerField(min_value=0)

    class Meta:
        model = CatalogItem
        fields = [
            'id', 'name', 'category', 'category_display', 'price_per_day_cents',
            'description', 'photo', 'is_active', 'created_at', 'updated_at'
        ]


class CatalogItemListSerializer(CatalogItemSerializer):
    """Catalog item with unit counts per status, as shown on the inventory page"""
    unit_count = serializers.IntegerField(read_only=True)
    available_unit_count = serializers.IntegerField(read_only=True)

    class Meta(CatalogItemSerializer.Meta):
        fields = CatalogItemSerializer.Meta.fields + ['unit_count', 'available_unit_count']
