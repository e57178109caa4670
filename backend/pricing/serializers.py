from rest_framework import serializers


class LineItemInputSerializer(serializers.Serializer):
    price_per_day_cents = serializers.IntegerField(min_value=0)
    quantity = serializers.IntegerField(min_value=1)
    number_of_days = serializers.IntegerField(min_value=1)


class SectionInputSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, default='')
    tax_enabled = serializers.BooleanField(required=False, default=False)
    tax_rate = serializers.IntegerField(min_value=0, max_value=100, required=False, default=0)
    items = LineItemInputSerializer(many=True, required=False, default=list)


class QuoteTotalsInputSerializer(serializers.Serializer):
    """Sections of an unsaved quote, as posted by the quote editor"""
    sections = SectionInputSerializer(many=True)
