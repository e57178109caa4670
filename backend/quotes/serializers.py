import uuid
from django.db import transaction
from django.utils import timezone
from rest_framework import serializers
from .models import Quote, QuoteSection, QuoteItem


def generate_reference_number():
    reference = f"Q-{timezone.now().strftime('%Y%m%d')}-{str(uuid.uuid4())[:8].upper()}"
    while Quote.objects.filter(reference_number=reference).exists():
        reference = f"Q-{timezone.now().strftime('%Y%m%d')}-{str(uuid.uuid4())[:8].upper()}"
    return reference


class QuoteItemSerializer(serializers.ModelSerializer):
    equipment_name = serializers.CharField(source='equipment.name', read_only=True, default=None)
    quantity = serializers.IntegerField(min_value=1)
    number_of_days = serializers.IntegerField(min_value=1)
    price_per_day_cents = serializers.IntegerField(min_value=0)
    line_total_cents = serializers.IntegerField(read_only=True)

    class Meta:
        model = QuoteItem
        fields = [
            'id', 'position', 'equipment', 'equipment_name', 'quantity', 'price_per_day_cents',
            'number_of_days', 'is_custom', 'description', 'custom_name', 'custom_category',
            'line_total_cents'
        ]
        read_only_fields = ['position']

    def validate(self, attrs):
        if attrs.get('is_custom'):
            if not (attrs.get('custom_name') or '').strip():
                raise serializers.ValidationError({'custom_name': 'Custom lines need a name.'})
            # Custom lines never point at stock
            attrs['equipment'] = None
        elif not attrs.get('equipment'):
            raise serializers.ValidationError({'equipment': 'Pick a catalog item or mark the line as custom.'})
        return attrs


class QuoteSectionSerializer(serializers.ModelSerializer):
    items = QuoteItemSerializer(many=True, required=False)
    tax_rate = serializers.IntegerField(min_value=0, max_value=100, required=False, default=0)

    class Meta:
        model = QuoteSection
        fields = [
            'id', 'position', 'name', 'tax_enabled', 'tax_rate',
            'subtotal_cents', 'tax_cents', 'total_cents', 'items'
        ]
        read_only_fields = ['position', 'subtotal_cents', 'tax_cents', 'total_cents']

    def validate_name(self, value):
        if not value or not value.strip():
            raise serializers.ValidationError('Section name is required.')
        return value.strip()


class QuoteListSerializer(serializers.ModelSerializer):
    client_name = serializers.CharField(source='client.name', read_only=True)
    venue_name = serializers.CharField(source='venue.venue_name', read_only=True, default=None)
    office_display = serializers.CharField(source='get_office_display', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Quote
        fields = [
            'id', 'reference_number', 'client', 'client_name', 'venue', 'venue_name',
            'event_start_date', 'event_end_date', 'office', 'office_display', 'status',
            'status_display', 'subtotal_cents', 'tax_cents', 'total_cents', 'created_at'
        ]


class QuoteSerializer(serializers.ModelSerializer):
    """
    Full quote with nested sections and items.

    Writes always replace every section and item of the quote; totals are
    recomputed from the submitted lines and never taken from the payload.
    """
    sections = QuoteSectionSerializer(many=True, required=False)
    client_name = serializers.CharField(source='client.name', read_only=True)
    venue_name = serializers.CharField(source='venue.venue_name', read_only=True, default=None)
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = Quote
        fields = [
            'id', 'reference_number', 'client', 'client_name', 'venue', 'venue_name',
            'event_start_date', 'event_end_date', 'office', 'status', 'notes',
            'subtotal_cents', 'tax_cents', 'total_cents', 'created_by', 'created_by_username',
            'created_at', 'updated_at', 'sections'
        ]
        read_only_fields = [
            'reference_number', 'subtotal_cents', 'tax_cents', 'total_cents',
            'created_by', 'created_at', 'updated_at'
        ]

    def validate(self, attrs):
        start = attrs.get('event_start_date', getattr(self.instance, 'event_start_date', None))
        end = attrs.get('event_end_date', getattr(self.instance, 'event_end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'event_end_date': 'Event end date cannot be before the start date.'})
        return attrs

    def _replace_sections(self, quote, sections_data):
        quote.sections.all().delete()
        for section_position, section_data in enumerate(sections_data):
            items_data = section_data.pop('items', [])
            section = QuoteSection.objects.create(quote=quote, position=section_position, **section_data)
            QuoteItem.objects.bulk_create([
                QuoteItem(section=section, position=item_position, **item_data)
                for item_position, item_data in enumerate(items_data)
            ])
        quote.recalculate_totals()

    @transaction.atomic
    def create(self, validated_data):
        sections_data = validated_data.pop('sections', [])
        validated_data['reference_number'] = generate_reference_number()
        quote = Quote.objects.create(**validated_data)
        self._replace_sections(quote, sections_data)
        return quote

    @transaction.atomic
    def update(self, instance, validated_data):
        sections_data = validated_data.pop('sections', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        if sections_data is not None:
            self._replace_sections(instance, sections_data)
        return instance


class QuoteStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Quote.Status.choices)
