from rest_framework import serializers
from .models import Client, Venue, Vendor


class ClientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ['id', 'name', 'company', 'email', 'phone', 'address', 'notes', 'is_active', 'created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Client name cannot be blank')
        return value


class VenueSerializer(serializers.ModelSerializer):
    class Meta:
        model = Venue
        fields = [
            'id', 'venue_name', 'address_line_1', 'address_line_2', 'city', 'state',
            'postal_code', 'country', 'notes', 'created_at', 'updated_at'
        ]


class VendorSerializer(serializers.ModelSerializer):
    category_display = serializers.CharField(source='get_category_display', read_only=True)

    class Meta:
        model = Vendor
        fields = [
            'id', 'name', 'category', 'category_display', 'contact_name', 'email', 'phone',
            'website', 'address', 'notes', 'is_active', 'created_at', 'updated_at'
        ]
