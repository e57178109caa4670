import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer, TokenRefreshSerializer
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist
from django.shortcuts import get_object_or_404
from django.db.models import Q
from .models import AuditLog
from .serializers import UserSerializer, UserCreateSerializer, AuditLogSerializer
from .utils import is_admin_user
from backend.catalog.models import CatalogItem
from backend.catalog.serializers import CatalogItemSerializer
from backend.inventory.models import AssetUnit
from backend.inventory.serializers import AssetUnitSerializer
from backend.parties.models import Client, Venue, Vendor
from backend.parties.serializers import ClientSerializer, VenueSerializer, VendorSerializer
from backend.quotes.models import Quote
from backend.quotes.serializers import QuoteListSerializer

User = get_user_model()
logger = logging.getLogger('backend.core')

SEARCH_LIMIT = 20


class OfficeTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Access tokens carry the username and home office so clients can default the office filter"""

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['username'] = user.username
        token['home_office'] = user.home_office
        return token


class OfficeTokenObtainPairView(TokenObtainPairView):
    serializer_class = OfficeTokenObtainPairSerializer


class SafeTokenRefreshSerializer(TokenRefreshSerializer):
    def validate(self, attrs):
        try:
            return super().validate(attrs)
        except TokenError:
            raise InvalidToken('Token is invalid or expired.')
        except ObjectDoesNotExist:
            raise InvalidToken('Token is invalid. User no longer exists.')


class SafeTokenRefreshView(TokenRefreshView):
    serializer_class = SafeTokenRefreshSerializer


@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Create a staff account and return a token pair"""
    serializer = UserCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    user = serializer.save()
    token = OfficeTokenObtainPairSerializer.get_token(user)
    logger.info(f"User {user.username} registered (office: {user.home_office or 'none'})")
    return Response({
        'user': UserSerializer(user).data,
        'access': str(token.access_token),
        'refresh': str(token),
    }, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def user_me(request):
    """Current user; PATCH completes or edits the profile (name, email, phone, home office)"""
    user = request.user
    if request.method == 'PATCH':
        serializer = UserSerializer(user, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        user = serializer.save()
        logger.info(f"User {user.username} updated their profile")
    data = UserSerializer(user).data
    data['is_admin'] = is_admin_user(user)
    return Response(data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def audit_log_list(request):
    """
    Audit trail, newest first.

    Staff see every entry; other users only their own. Filters: action,
    model, reference (quote number or asset tag), date_from, date_to.
    """
    queryset = AuditLog.objects.select_related('user')
    if not request.user.is_staff:
        queryset = queryset.filter(user=request.user)

    params = request.query_params
    lookups = {
        'action': 'action',
        'model': 'model_name',
        'reference': 'object_reference',
        'date_from': 'created_at__date__gte',
        'date_to': 'created_at__date__lte',
    }
    for param, lookup in lookups.items():
        value = params.get(param)
        if value:
            queryset = queryset.filter(**{lookup: value})

    return Response(AuditLogSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def audit_log_detail(request, pk):
    audit_log = get_object_or_404(AuditLog.objects.select_related('user'), pk=pk)
    if not request.user.is_staff and audit_log.user_id != request.user.id:
        return Response({'error': 'Permission denied'}, status=status.HTTP_403_FORBIDDEN)
    return Response(AuditLogSerializer(audit_log).data)


# (key, queryset, lookups, serializer) searched by global_search
SEARCH_TARGETS = [
    ('catalog_items', CatalogItem.objects.all(), ['name', 'description'], CatalogItemSerializer),
    ('asset_units', AssetUnit.objects.select_related('item'), ['asset_tag', 'item__name'], AssetUnitSerializer),
    ('clients', Client.objects.all(), ['name', 'company', 'email', 'phone'], ClientSerializer),
    ('venues', Venue.objects.all(), ['venue_name', 'city'], VenueSerializer),
    ('vendors', Vendor.objects.all(), ['name', 'contact_name', 'email'], VendorSerializer),
    ('quotes', Quote.objects.select_related('client', 'venue'), ['reference_number', 'client__name'],
     QuoteListSerializer),
]


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def global_search(request):
    """Case-insensitive search across catalog, units, parties and quotes"""
    query = request.query_params.get('q', '').strip()
    results = {}
    for key, queryset, fields, serializer_class in SEARCH_TARGETS:
        if not query:
            results[key] = []
            continue
        condition = Q()
        for field in fields:
            condition |= Q(**{f'{field}__icontains': query})
        matches = queryset.filter(condition)[:SEARCH_LIMIT]
        results[key] = serializer_class(matches, many=True).data
    return Response(results)
