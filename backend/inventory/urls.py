from django.urls import path
from .views import (
    asset_unit_list, asset_unit_detail,
    catalog_item_asset_units, catalog_item_availability, inventory_clear
)

urlpatterns = [
    path('asset-units/', asset_unit_list, name='asset-unit-list'),
    path('asset-units/<int:pk>/', asset_unit_detail, name='asset-unit-detail'),
    path('inventory/clear/', inventory_clear, name='inventory-clear'),
    path('catalog-items/<int:pk>/asset-units/', catalog_item_asset_units, name='catalog-item-asset-units'),
    path('catalog-items/<int:pk>/availability/', catalog_item_availability, name='catalog-item-availability'),
]
