import logging
from datetime import timedelta
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from .models import Booking
from .serializers import BookingSerializer

logger = logging.getLogger('backend.bookings')

UPCOMING_BOOKING_DAYS = 7


def upcoming_bookings(today=None):
    """Bookings starting within the next week, cancelled ones excluded"""
    today = today or timezone.localdate()
    return Booking.objects.exclude(status=Booking.Status.CANCELLED).filter(
        start_date__gte=today,
        start_date__lte=today + timedelta(days=UPCOMING_BOOKING_DAYS),
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def booking_list_create(request):
    """List bookings (filter by status, client, equipment, date window) or create one"""
    if request.method == 'GET':
        queryset = Booking.objects.select_related('equipment', 'client')
        params = request.query_params
        if params.get('status'):
            queryset = queryset.filter(status=params['status'])
        if params.get('client'):
            queryset = queryset.filter(client_id=params['client'])
        if params.get('equipment'):
            queryset = queryset.filter(equipment_id=params['equipment'])
        # Window overlap, inclusive on both ends
        if params.get('date_from'):
            queryset = queryset.filter(end_date__gte=params['date_from'])
        if params.get('date_to'):
            queryset = queryset.filter(start_date__lte=params['date_to'])
        return Response(BookingSerializer(queryset, many=True).data)

    serializer = BookingSerializer(data=request.data)
    if serializer.is_valid():
        booking = serializer.save(created_by=request.user)
        logger.info(
            f"Booking {booking.id} of item {booking.equipment_id} for client {booking.client_id} "
            f"({booking.start_date} - {booking.end_date}) created by {request.user.username}"
        )
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def booking_detail(request, pk):
    """Retrieve, update or delete a booking"""
    booking = get_object_or_404(Booking.objects.select_related('equipment', 'client'), pk=pk)

    if request.method == 'GET':
        return Response(BookingSerializer(booking).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = BookingSerializer(booking, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            logger.info(f"Booking {pk} updated by {request.user.username}")
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    booking.delete()
    logger.info(f"Booking {pk} deleted by {request.user.username}")
    return Response(status=status.HTTP_204_NO_CONTENT)
