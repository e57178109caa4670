import django_filters
from django.db.models import Q
from .models import CatalogItem


class CatalogItemFilter(django_filters.FilterSet):
    """Filter for the catalog list"""

    search = django_filters.CharFilter(method='filter_search', label='Search')
    category = django_filters.ChoiceFilter(choices=CatalogItem.Category.choices)
    active = django_filters.CharFilter(method='filter_active', label='Active')
    office = django_filters.CharFilter(method='filter_office', label='Has units at office')

    class Meta:
        model = CatalogItem
        fields = ['search', 'category', 'active', 'office']

    def filter_search(self, queryset, name, value):
        """Every word must appear in the name or description"""
        words = [w for w in (value or '').split() if w]
        for word in words:
            queryset = queryset.filter(Q(name__icontains=word) | Q(description__icontains=word))
        return queryset

    def filter_active(self, queryset, name, value):
        if value is None or value == '':
            return queryset
        return queryset.filter(is_active=str(value).lower() in ('1', 'true', 'yes'))

    def filter_office(self, queryset, name, value):
        if not value:
            return queryset
        return queryset.filter(asset_units__office_location=value).distinct()
