from django.urls import path
from .views import catalog_item_list_create, catalog_item_detail, catalog_import_csv, catalog_csv_template

urlpatterns = [
    path('catalog-items/', catalog_item_list_create, name='catalog-item-list-create'),
    path('catalog-items/import/', catalog_import_csv, name='catalog-import-csv'),
    path('catalog-items/csv-template/', catalog_csv_template, name='catalog-csv-template'),
    path('catalog-items/<int:pk>/', catalog_item_detail, name='catalog-item-detail'),
]
