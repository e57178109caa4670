import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
from .models import AssetUnit
from .serializers import AssetUnitSerializer, AvailabilityQuerySerializer
from .services import item_availability, clear_inventory
from backend.catalog.models import CatalogItem
from backend.core.utils import create_audit_log, is_admin_user

logger = logging.getLogger('backend.inventory')


def _log_unit_change(request, action, unit, changes=None):
    create_audit_log(
        action,
        unit,
        request=request,
        object_name=unit.item.name,
        object_reference=unit.asset_tag,
        changes=changes,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def asset_unit_list(request):
    """List asset units, filterable by item, office and status"""
    queryset = AssetUnit.objects.select_related('item')

    item_id = request.query_params.get('item')
    office = request.query_params.get('office')
    unit_status = request.query_params.get('status')
    if item_id:
        queryset = queryset.filter(item_id=item_id)
    if office:
        queryset = queryset.filter(office_location=office)
    if unit_status:
        queryset = queryset.filter(status=unit_status)

    serializer = AssetUnitSerializer(queryset, many=True)
    return Response(serializer.data)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def catalog_item_asset_units(request, pk):
    """List or add the asset units of one catalog item"""
    item = get_object_or_404(CatalogItem, pk=pk)

    if request.method == 'GET':
        serializer = AssetUnitSerializer(item.asset_units.select_related('item'), many=True)
        return Response(serializer.data)

    serializer = AssetUnitSerializer(data={**request.data, 'item': item.id})
    if serializer.is_valid():
        unit = serializer.save()
        logger.info(f"Asset unit {unit.asset_tag} added to '{item.name}' at {unit.office_location} by {request.user.username}")
        _log_unit_change(request, 'unit_create', unit, {
            'office_location': unit.office_location,
            'status': unit.status,
        })
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def asset_unit_detail(request, pk):
    """Retrieve, update or delete an asset unit"""
    unit = get_object_or_404(AssetUnit.objects.select_related('item'), pk=pk)

    if request.method == 'GET':
        serializer = AssetUnitSerializer(unit)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        old_status = unit.status
        old_office = unit.office_location
        serializer = AssetUnitSerializer(unit, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            unit = serializer.save()
            changes = {}
            if unit.status != old_status:
                changes['status'] = {'old': old_status, 'new': unit.status}
            if unit.office_location != old_office:
                changes['office_location'] = {'old': old_office, 'new': unit.office_location}
            action = 'unit_status' if list(changes) == ['status'] else 'unit_update'
            _log_unit_change(request, action, unit, changes)
            logger.info(f"Asset unit {unit.asset_tag} updated by {request.user.username}: {changes}")
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        _log_unit_change(request, 'unit_delete', unit)
        logger.info(f"Asset unit {unit.asset_tag} deleted by {request.user.username}")
        unit.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def catalog_item_availability(request, pk):
    """
    Free units of a catalog item at one office for a date range.

    Query params: office, start_date, end_date (optional, defaults to start_date),
    exclude_quote (optional quote id whose own allocation is ignored),
    required (optional, used to compute the shortage).
    """
    item = get_object_or_404(CatalogItem, pk=pk)
    query = AvailabilityQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

    params = query.validated_data
    result = item_availability(
        item.id,
        params['office'],
        params['start_date'],
        params.get('end_date'),
        exclude_quote_id=params.get('exclude_quote'),
        required_quantity=params.get('required', 0),
    )
    logger.debug(f"Availability for item {item.id} at {params['office']}: {result['available']}")
    return Response(result)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def inventory_clear(request):
    """Delete all asset units and unused catalog items (Admin only)"""
    if not is_admin_user(request.user):
        return Response({'error': 'Only Admin users can clear inventory'}, status=status.HTTP_403_FORBIDDEN)
    result = clear_inventory()
    logger.warning(f"Inventory cleared by {request.user.username}: {result}")
    return Response(result)
