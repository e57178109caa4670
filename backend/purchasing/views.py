import logging
from django.core.paginator import Paginator
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from .models import Subrental, JobCost
from .serializers import SubrentalSerializer, JobCostSerializer
from .services import job_cost_summary
from backend.quotes.models import Quote

logger = logging.getLogger('backend.purchasing')


def _paginate(request, queryset, serializer_class):
    try:
        page = int(request.query_params.get('page', 1))
        limit = int(request.query_params.get('limit', 25))
    except (TypeError, ValueError):
        page, limit = 1, 25
    paginator = Paginator(queryset, max(limit, 1))
    page_obj = paginator.get_page(page)
    return Response({
        'results': serializer_class(page_obj, many=True).data,
        'count': paginator.count,
        'next': page_obj.next_page_number() if page_obj.has_next() else None,
        'previous': page_obj.previous_page_number() if page_obj.has_previous() else None,
        'page': page_obj.number,
        'page_size': paginator.per_page,
        'total_pages': paginator.num_pages,
    })


# Subrental views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def subrental_list_create(request):
    """List subrentals (filter by quote, vendor, status; paginated) or create one"""
    if request.method == 'GET':
        queryset = Subrental.objects.select_related('quote', 'vendor', 'item')
        quote_id = request.query_params.get('quote')
        vendor_id = request.query_params.get('vendor')
        status_filter = request.query_params.get('status')
        if quote_id:
            queryset = queryset.filter(quote_id=quote_id)
        if vendor_id:
            queryset = queryset.filter(vendor_id=vendor_id)
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return _paginate(request, queryset, SubrentalSerializer)

    serializer = SubrentalSerializer(data=request.data)
    if serializer.is_valid():
        subrental = serializer.save(created_by=request.user)
        logger.info(
            f"Subrental {subrental.id} from vendor {subrental.vendor_id} "
            f"for quote {subrental.quote.reference_number} created by {request.user.username}"
        )
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def subrental_detail(request, pk):
    """Retrieve, update or delete a subrental"""
    subrental = get_object_or_404(Subrental.objects.select_related('quote', 'vendor', 'item'), pk=pk)

    if request.method == 'GET':
        return Response(SubrentalSerializer(subrental).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = SubrentalSerializer(subrental, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    subrental.delete()
    logger.info(f"Subrental {pk} deleted by {request.user.username}")
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def quote_subrentals(request, pk):
    """Subrentals of one quote"""
    quote = get_object_or_404(Quote, pk=pk)

    if request.method == 'GET':
        queryset = quote.subrentals.select_related('vendor', 'item')
        return Response(SubrentalSerializer(queryset, many=True).data)

    serializer = SubrentalSerializer(data={**request.data, 'quote': quote.id})
    if serializer.is_valid():
        subrental = serializer.save(created_by=request.user)
        logger.info(f"Subrental {subrental.id} added to quote {quote.reference_number} by {request.user.username}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


# Job cost views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def job_cost_list_create(request):
    """List job costs (filter by quote, vendor category) or record a new one"""
    if request.method == 'GET':
        queryset = JobCost.objects.select_related('quote', 'vendor')
        quote_id = request.query_params.get('quote')
        category = request.query_params.get('vendor_category')
        if quote_id:
            queryset = queryset.filter(quote_id=quote_id)
        if category:
            queryset = queryset.filter(vendor_category=category)
        return Response(JobCostSerializer(queryset, many=True).data)

    serializer = JobCostSerializer(data=request.data)
    if serializer.is_valid():
        cost = serializer.save()
        logger.info(f"Cost {cost.id} recorded on quote {cost.quote.reference_number} by {request.user.username}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def job_cost_detail(request, pk):
    """Retrieve, update or delete a job cost"""
    cost = get_object_or_404(JobCost.objects.select_related('quote', 'vendor'), pk=pk)

    if request.method == 'GET':
        return Response(JobCostSerializer(cost).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = JobCostSerializer(cost, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    cost.delete()
    logger.info(f"Cost {pk} deleted by {request.user.username}")
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def quote_costs(request, pk):
    """Costs of one job with the projected/actual summary, or record a cost on it"""
    quote = get_object_or_404(Quote, pk=pk)

    if request.method == 'GET':
        costs = list(quote.costs.select_related('vendor'))
        return Response({
            'quote': quote.id,
            'reference_number': quote.reference_number,
            'costs': JobCostSerializer(costs, many=True).data,
            'summary': job_cost_summary(quote, costs),
        })

    serializer = JobCostSerializer(data={**request.data, 'quote': quote.id})
    if serializer.is_valid():
        cost = serializer.save()
        logger.info(f"Cost {cost.id} recorded on quote {quote.reference_number} by {request.user.username}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
