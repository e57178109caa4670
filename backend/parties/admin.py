from django.contrib import admin
from .models import Client, Venue, Vendor


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['name', 'company', 'email', 'phone', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'company', 'email', 'phone']
    ordering = ['name']


@admin.register(Venue)
class VenueAdmin(admin.ModelAdmin):
    list_display = ['venue_name', 'city', 'state', 'country', 'created_at']
    list_filter = ['state', 'country']
    search_fields = ['venue_name', 'city', 'address_line_1']
    ordering = ['venue_name']


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'contact_name', 'email', 'phone', 'is_active']
    list_filter = ['category', 'is_active']
    search_fields = ['name', 'contact_name', 'email']
    ordering = ['name']
