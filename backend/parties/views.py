import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db.models import Q, ProtectedError
from django.shortcuts import get_object_or_404
from .models import Client, Venue, Vendor
from .serializers import ClientSerializer, VenueSerializer, VendorSerializer

logger = logging.getLogger('backend.parties')


def _delete_or_conflict(request, obj, label):
    """Delete obj, or answer 409 when quotes, bookings, subrentals or costs still reference it"""
    try:
        obj.delete()
    except ProtectedError:
        logger.warning(f"User {request.user.username} tried to delete {label} {obj.pk} which is still referenced")
        return Response(
            {'error': f'This {label} is used on existing quotes, bookings, subrentals or costs and cannot be deleted.'},
            status=status.HTTP_409_CONFLICT
        )
    logger.info(f"{label.capitalize()} {obj.pk} deleted by {request.user.username}")
    return Response(status=status.HTTP_204_NO_CONTENT)


# Client views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def client_list_create(request):
    """List all clients (optionally searched) or create a new client"""
    if request.method == 'GET':
        queryset = Client.objects.all()
        search = request.query_params.get('search')
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) |
                Q(company__icontains=search) |
                Q(email__icontains=search) |
                Q(phone__icontains=search)
            )
        serializer = ClientSerializer(queryset, many=True)
        return Response(serializer.data)

    serializer = ClientSerializer(data=request.data)
    if serializer.is_valid():
        client = serializer.save()
        logger.info(f"Client '{client.name}' created by {request.user.username}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def client_detail(request, pk):
    """Retrieve, update or delete a client"""
    client = get_object_or_404(Client, pk=pk)

    if request.method == 'GET':
        return Response(ClientSerializer(client).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ClientSerializer(client, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    return _delete_or_conflict(request, client, 'client')


# Venue views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def venue_list_create(request):
    """List venues (search by name or city) or create a new venue"""
    if request.method == 'GET':
        queryset = Venue.objects.all()
        search = request.query_params.get('search')
        if search:
            queryset = queryset.filter(
                Q(venue_name__icontains=search) |
                Q(city__icontains=search) |
                Q(address_line_1__icontains=search)
            )
        serializer = VenueSerializer(queryset, many=True)
        return Response(serializer.data)

    serializer = VenueSerializer(data=request.data)
    if serializer.is_valid():
        venue = serializer.save()
        logger.info(f"Venue '{venue.venue_name}' created by {request.user.username}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def venue_detail(request, pk):
    """Retrieve, update or delete a venue"""
    venue = get_object_or_404(Venue, pk=pk)

    if request.method == 'GET':
        return Response(VenueSerializer(venue).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = VenueSerializer(venue, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    return _delete_or_conflict(request, venue, 'venue')


# Vendor views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def vendor_list_create(request):
    """List vendors (filter by category, search) or create a new vendor"""
    if request.method == 'GET':
        queryset = Vendor.objects.all()
        category = request.query_params.get('category')
        if category:
            queryset = queryset.filter(category=category)
        search = request.query_params.get('search')
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) |
                Q(contact_name__icontains=search) |
                Q(email__icontains=search)
            )
        serializer = VendorSerializer(queryset, many=True)
        return Response(serializer.data)

    serializer = VendorSerializer(data=request.data)
    if serializer.is_valid():
        vendor = serializer.save()
        logger.info(f"Vendor '{vendor.name}' created by {request.user.username}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def vendor_detail(request, pk):
    """Retrieve, update or delete a vendor"""
    vendor = get_object_or_404(Vendor, pk=pk)

    if request.method == 'GET':
        return Response(VendorSerializer(vendor).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = VendorSerializer(vendor, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    return _delete_or_conflict(request, vendor, 'vendor')
