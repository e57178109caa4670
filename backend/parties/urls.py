from django.urls import path
from .views import (
    client_list_create, client_detail,
    venue_list_create, venue_detail,
    vendor_list_create, vendor_detail
)

urlpatterns = [
    # Client endpoints
    path('clients/', client_list_create, name='client-list-create'),
    path('clients/<int:pk>/', client_detail, name='client-detail'),

    # Venue endpoints
    path('venues/', venue_list_create, name='venue-list-create'),
    path('venues/<int:pk>/', venue_detail, name='venue-detail'),

    # Vendor endpoints
    path('vendors/', vendor_list_create, name='vendor-list-create'),
    path('vendors/<int:pk>/', vendor_detail, name='vendor-detail'),
]
