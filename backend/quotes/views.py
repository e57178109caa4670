import logging
from collections import OrderedDict
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db.models import Prefetch
from django.shortcuts import get_object_or_404
from .models import Quote, QuoteSection, QuoteItem
from .filters import QuoteFilter
from .serializers import QuoteSerializer, QuoteListSerializer, QuoteStatusSerializer
from backend.core.utils import create_audit_log
from backend.inventory.services import quote_prep_lines

logger = logging.getLogger('backend.quotes')


def quote_detail_queryset():
    """Quotes with client, venue, sections and their items loaded"""
    return Quote.objects.select_related('client', 'venue', 'created_by').prefetch_related(
        Prefetch(
            'sections',
            queryset=QuoteSection.objects.prefetch_related(
                Prefetch('items', queryset=QuoteItem.objects.select_related('equipment'))
            )
        )
    )


def _log_quote_change(request, action, quote, changes=None):
    create_audit_log(
        action,
        quote,
        request=request,
        object_name=quote.client.name if quote.client_id else None,
        object_reference=quote.reference_number,
        changes=changes,
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def quote_list_create(request):
    """List quotes (filter by status, office, client, date window, search) or create one"""
    if request.method == 'GET':
        queryset = Quote.objects.select_related('client', 'venue')
        filterset = QuoteFilter(request.query_params, queryset=queryset)
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        serializer = QuoteListSerializer(filterset.qs, many=True)
        return Response(serializer.data)

    serializer = QuoteSerializer(data=request.data)
    if serializer.is_valid():
        quote = serializer.save(created_by=request.user)
        logger.info(
            f"Quote {quote.reference_number} created by {request.user.username} "
            f"for client {quote.client_id}, total {quote.total_cents} cents"
        )
        _log_quote_change(request, 'quote_create', quote, {
            'status': quote.status,
            'office': quote.office,
            'total_cents': quote.total_cents,
        })
        return Response(QuoteSerializer(quote_detail_queryset().get(pk=quote.pk)).data,
                        status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def quote_detail(request, pk):
    """Retrieve, update (sections are replaced wholesale) or delete a quote"""
    quote = get_object_or_404(quote_detail_queryset(), pk=pk)

    if request.method == 'GET':
        return Response(QuoteSerializer(quote).data)
    elif request.method in ('PUT', 'PATCH'):
        old_total = quote.total_cents
        old_status = quote.status
        serializer = QuoteSerializer(quote, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            quote = serializer.save()
            logger.info(f"Quote {quote.reference_number} updated by {request.user.username}")
            changes = {}
            if quote.total_cents != old_total:
                changes['total_cents'] = {'old': old_total, 'new': quote.total_cents}
            if quote.status != old_status:
                changes['status'] = {'old': old_status, 'new': quote.status}
            _log_quote_change(request, 'quote_update', quote, changes)
            return Response(QuoteSerializer(quote_detail_queryset().get(pk=quote.pk)).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        _log_quote_change(request, 'quote_delete', quote, {'status': quote.status})
        reference = quote.reference_number
        quote.delete()
        logger.info(f"Quote {reference} deleted by {request.user.username}")
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def confirmed_quote_list(request):
    """Approved quotes, i.e. confirmed jobs, optionally narrowed by office and date window"""
    queryset = Quote.objects.select_related('client', 'venue').filter(status=Quote.Status.APPROVED)
    filterset = QuoteFilter(request.query_params, queryset=queryset)
    if not filterset.is_valid():
        return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
    serializer = QuoteListSerializer(filterset.qs.order_by('event_start_date', 'id'), many=True)
    return Response(serializer.data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def quote_status_update(request, pk):
    """Move a quote to another status; approving it makes it count against availability"""
    quote = get_object_or_404(Quote.objects.select_related('client'), pk=pk)
    serializer = QuoteStatusSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    old_status = quote.status
    new_status = serializer.validated_data['status']
    if old_status != new_status:
        quote.status = new_status
        quote.save(update_fields=['status', 'updated_at'])
        logger.info(f"Quote {quote.reference_number} status {old_status} -> {new_status} by {request.user.username}")
        _log_quote_change(request, 'quote_status', quote, {'status': {'old': old_status, 'new': new_status}})
    return Response(QuoteListSerializer(quote).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def quote_prep(request, pk):
    """Required vs available quantity for every catalog item on the quote"""
    quote = get_object_or_404(quote_detail_queryset(), pk=pk)
    lines = quote_prep_lines(quote)
    return Response({
        'quote': quote.id,
        'reference_number': quote.reference_number,
        'office': quote.office,
        'event_start_date': quote.event_start_date,
        'event_end_date': quote.effective_end_date,
        'lines': lines,
        'has_shortage': any(line['shortage'] < 0 for line in lines),
    })


def build_pull_list(quote):
    """Equipment to pull for a job: catalog items summed across sections, then custom lines"""
    equipment = OrderedDict()
    custom_items = []
    sections = []
    for section in quote.sections.all():
        section_lines = []
        for line in section.items.all():
            section_lines.append({
                'name': line.display_name,
                'quantity': line.quantity,
                'is_custom': line.is_custom,
            })
            if line.is_custom:
                custom_items.append({
                    'name': line.custom_name,
                    'category': line.custom_category,
                    'description': line.description,
                    'quantity': line.quantity,
                })
                continue
            entry = equipment.setdefault(line.equipment_id, {
                'item': line.equipment_id,
                'item_name': line.equipment.name,
                'category': line.equipment.category,
                'quantity': 0,
            })
            entry['quantity'] += line.quantity
        sections.append({'name': section.name, 'items': section_lines})

    return {
        'equipment': list(equipment.values()),
        'custom_items': custom_items,
        'sections': sections,
        'total_lines': sum(len(section['items']) for section in sections),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def quote_pull_list(request, pk):
    """Pull list for a quote"""
    quote = get_object_or_404(quote_detail_queryset(), pk=pk)
    venue = quote.venue
    return Response({
        'quote': quote.id,
        'reference_number': quote.reference_number,
        'client_name': quote.client.name,
        'venue': {
            'venue_name': venue.venue_name,
            'city': venue.city,
            'state': venue.state,
        } if venue else None,
        'event_start_date': quote.event_start_date,
        'event_end_date': quote.event_end_date,
        **build_pull_list(quote),
    })
