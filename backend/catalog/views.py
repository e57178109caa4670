import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db.models import Q, Count, ProtectedError
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from .models import CatalogItem
from .filters import CatalogItemFilter
from .serializers import CatalogItemSerializer, CatalogItemListSerializer
from .csv_import import CsvImportError, csv_template, import_inventory_csv
from backend.core.cache_utils import get_cached_catalog_list, cache_catalog_list
from backend.core.utils import is_admin_user

logger = logging.getLogger('backend.catalog')

CATALOG_FILTER_PARAMS = ('search', 'category', 'active', 'office')


def annotated_catalog_items():
    """Catalog items with total and available unit counts"""
    return CatalogItem.objects.annotate(
        unit_count=Count('asset_units', distinct=True),
        available_unit_count=Count(
            'asset_units',
            filter=Q(asset_units__status='available'),
            distinct=True,
        ),
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def catalog_item_list_create(request):
    """List catalog items (filterable, cached) or create a new one"""
    if request.method == 'GET':
        filters_dict = {
            key: request.query_params.get(key)
            for key in CATALOG_FILTER_PARAMS
            if request.query_params.get(key)
        }
        cached_data, cache_key = get_cached_catalog_list(filters_dict)
        if cached_data is not None:
            return Response(cached_data)

        filterset = CatalogItemFilter(filters_dict, queryset=annotated_catalog_items())
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)

        data = CatalogItemListSerializer(filterset.qs.order_by('name'), many=True).data
        cache_catalog_list(cache_key, data)
        return Response(data)

    serializer = CatalogItemSerializer(data=request.data)
    if serializer.is_valid():
        item = serializer.save()
        logger.info(f"Catalog item '{item.name}' created by {request.user.username}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def catalog_item_detail(request, pk):
    """Retrieve, update or delete a catalog item (deleting removes its asset units)"""
    item = get_object_or_404(CatalogItem, pk=pk)

    if request.method == 'GET':
        serializer = CatalogItemSerializer(item)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = CatalogItemSerializer(item, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            logger.info(f"Catalog item {item.id} updated by {request.user.username}")
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            item.delete()
        except ProtectedError:
            logger.warning(f"User {request.user.username} tried to delete catalog item {pk} that is used on quotes or bookings")
            return Response(
                {'error': 'This item is used on existing quotes or bookings and cannot be deleted. Set is_active to false to retire it.'},
                status=status.HTTP_409_CONFLICT
            )
        logger.info(f"Catalog item {pk} deleted by {request.user.username}")
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def catalog_import_csv(request):
    """
    Import catalog items and asset units from CSV (Admin only).

    Accepts an uploaded ``file`` or the CSV text in ``csv_data``. The whole
    file is rejected with per-line errors if any row is invalid.
    """
    if not is_admin_user(request.user):
        return Response({'error': 'Only Admin users can import inventory'}, status=status.HTTP_403_FORBIDDEN)

    upload = request.FILES.get('file')
    if upload is not None:
        try:
            csv_text = upload.read().decode('utf-8-sig')
        except UnicodeDecodeError:
            return Response({'error': 'CSV file must be UTF-8 encoded'}, status=status.HTTP_400_BAD_REQUEST)
    else:
        csv_text = request.data.get('csv_data') or ''
    if not csv_text.strip():
        return Response({'error': 'No CSV data provided'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        result = import_inventory_csv(csv_text)
    except CsvImportError as e:
        logger.warning(f"CSV import by {request.user.username} rejected: {e}")
        return Response({'error': 'CSV contains invalid rows', 'rows': e.errors}, status=status.HTTP_400_BAD_REQUEST)

    logger.info(f"CSV import by {request.user.username}: {result}")
    return Response(result, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def catalog_csv_template(request):
    """Download the inventory import template (Admin only)"""
    if not is_admin_user(request.user):
        return Response({'error': 'Only Admin users can import inventory'}, status=status.HTTP_403_FORBIDDEN)
    response = HttpResponse(csv_template(), content_type='text/csv')
    response['Content-Disposition'] = 'attachment; filename="inventory_import_template.csv"'
    return response
