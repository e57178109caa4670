from rest_framework import serializers
from .models import Subrental, JobCost


class SubrentalSerializer(serializers.ModelSerializer):
    quote_reference = serializers.CharField(source='quote.reference_number', read_only=True)
    vendor_name = serializers.CharField(source='vendor.name', read_only=True)
    item_name = serializers.CharField(source='item.name', read_only=True, default=None)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)
    cost_cents = serializers.IntegerField(min_value=0, required=False, default=0)

    class Meta:
        model = Subrental
        fields = [
            'id', 'quote', 'quote_reference', 'vendor', 'vendor_name', 'item', 'item_name',
            'description', 'quantity', 'cost_cents', 'status', 'status_display', 'notes',
            'created_by', 'created_at', 'updated_at'
        ]
        read_only_fields = ['created_by', 'created_at', 'updated_at']

    def validate(self, attrs):
        item = attrs.get('item', getattr(self.instance, 'item', None))
        description = attrs.get('description', getattr(self.instance, 'description', ''))
        if not item and not (description or '').strip():
            raise serializers.ValidationError('A subrental needs a catalog item or a description.')
        return attrs


class JobCostSerializer(serializers.ModelSerializer):
    quote_reference = serializers.CharField(source='quote.reference_number', read_only=True)
    vendor_name = serializers.CharField(source='vendor.name', read_only=True, default=None)
    vendor_category_display = serializers.CharField(source='get_vendor_category_display', read_only=True)
    projected_cost_cents = serializers.IntegerField(min_value=0)
    actual_cost_cents = serializers.IntegerField(min_value=0, required=False, default=0)
    variance_cents = serializers.IntegerField(read_only=True)

    class Meta:
        model = JobCost
        fields = [
            'id', 'quote', 'quote_reference', 'vendor', 'vendor_name', 'vendor_category',
            'vendor_category_display', 'projected_cost_cents', 'actual_cost_cents',
            'variance_cents', 'notes', 'created_at', 'updated_at'
        ]
        read_only_fields = ['created_at', 'updated_at']
