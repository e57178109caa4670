import logging
from django.db.models import Count, Q, Sum
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from backend.bookings.views import upcoming_bookings
from backend.catalog.models import CatalogItem
from backend.core.cache_utils import get_cached_dashboard, cache_dashboard
from backend.inventory.models import AssetUnit
from backend.parties.models import Client
from backend.quotes.models import Quote
from backend.quotes.serializers import QuoteListSerializer

logger = logging.getLogger('backend.reports')

UPCOMING_JOBS_LIMIT = 10


def _counts_by(queryset, field, choices):
    """{value: count} for every choice, including the empty ones"""
    counts = {value: 0 for value, _label in choices}
    for row in queryset.values(field).annotate(count=Count('id')):
        counts[row[field]] = row['count']
    return counts


def build_dashboard(today=None):
    today = today or timezone.localdate()
    confirmed = Quote.objects.filter(status=Quote.Status.APPROVED)
    upcoming = confirmed.filter(
        Q(event_end_date__gte=today) | Q(event_end_date__isnull=True, event_start_date__gte=today)
    ).select_related('client', 'venue').order_by('event_start_date', 'id')

    return {
        'catalog_items': CatalogItem.objects.count(),
        'asset_units': AssetUnit.objects.count(),
        'asset_units_by_status': _counts_by(AssetUnit.objects.all(), 'status', AssetUnit.Status.choices),
        'asset_units_by_office': _counts_by(
            AssetUnit.objects.all(), 'office_location', AssetUnit._meta.get_field('office_location').choices
        ),
        'clients': Client.objects.count(),
        'quotes_by_status': _counts_by(Quote.objects.all(), 'status', Quote.Status.choices),
        'confirmed_revenue_cents': confirmed.aggregate(total=Sum('total_cents'))['total'] or 0,
        'upcoming_jobs_count': upcoming.count(),
        'upcoming_jobs': QuoteListSerializer(upcoming[:UPCOMING_JOBS_LIMIT], many=True).data,
        'upcoming_bookings_count': upcoming_bookings(today).count(),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Headline numbers for the dashboard (cached, invalidated on writes)"""
    cached_data, cache_key = get_cached_dashboard()
    if cached_data is not None:
        return Response(cached_data)

    data = build_dashboard()
    cache_dashboard(cache_key, data)
    response = Response(data)
    response['Cache-Control'] = 'private, max-age=60, stale-while-revalidate=300'
    return response
