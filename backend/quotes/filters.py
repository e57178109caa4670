import django_filters
from django.db.models import Q
from backend.core.choices import OfficeLocation
from .models import Quote


class QuoteFilter(django_filters.FilterSet):
    """
    Filter for the quote list and booking calendar.

    date_from/date_to select quotes whose event range overlaps the window,
    inclusive on both ends; a quote without an end date lasts one day.
    """

    status = django_filters.ChoiceFilter(choices=Quote.Status.choices)
    office = django_filters.ChoiceFilter(choices=OfficeLocation.choices)
    client = django_filters.NumberFilter(field_name='client_id')
    date_from = django_filters.DateFilter(method='filter_date_from', label='Events ending on or after')
    date_to = django_filters.DateFilter(method='filter_date_to', label='Events starting on or before')
    search = django_filters.CharFilter(method='filter_search', label='Search')

    class Meta:
        model = Quote
        fields = ['status', 'office', 'client', 'date_from', 'date_to', 'search']

    def filter_date_from(self, queryset, name, value):
        return queryset.filter(
            Q(event_end_date__gte=value) |
            Q(event_end_date__isnull=True, event_start_date__gte=value)
        )

    def filter_date_to(self, queryset, name, value):
        return queryset.filter(event_start_date__lte=value)

    def filter_search(self, queryset, name, value):
        if not value:
            return queryset
        return queryset.filter(
            Q(reference_number__icontains=value) |
            Q(client__name__icontains=value) |
            Q(client__company__icontains=value) |
            Q(venue__venue_name__icontains=value)
        )
