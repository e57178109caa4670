from django.contrib import admin
from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ['equipment', 'client', 'start_date', 'end_date', 'status']
    list_filter = ['status']
    search_fields = ['equipment__name', 'client__name']
    date_hierarchy = 'start_date'
