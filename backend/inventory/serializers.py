from rest_framework import serializers
from .models import AssetUnit
from backend.core.choices import OfficeLocation


class AssetUnitSerializer(serializers.ModelSerializer):
    item_name = serializers.CharField(source='item.name', read_only=True)
    office_location_display = serializers.CharField(source='get_office_location_display', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = AssetUnit
        fields = [
            'id', 'item', 'item_name', 'asset_tag', 'office_location', 'office_location_display',
            'status', 'status_display', 'notes', 'created_at', 'updated_at'
        ]

    def validate_asset_tag(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Asset tag cannot be blank')
        return value


class AvailabilityQuerySerializer(serializers.Serializer):
    """Query parameters of the availability endpoint"""
    office = serializers.ChoiceField(choices=OfficeLocation.choices)
    start_date = serializers.DateField()
    end_date = serializers.DateField(required=False, allow_null=True)
    exclude_quote = serializers.IntegerField(required=False, allow_null=True)
    required = serializers.IntegerField(required=False, min_value=0, default=0)

    def validate(self, attrs):
        end_date = attrs.get('end_date')
        if end_date and end_date < attrs['start_date']:
            raise serializers.ValidationError({'end_date': 'End date cannot be before start date'})
        return attrs
