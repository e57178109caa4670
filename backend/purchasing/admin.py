from django.contrib import admin
from .models import Subrental, JobCost


@admin.register(Subrental)
class SubrentalAdmin(admin.ModelAdmin):
    list_display = ['quote', 'vendor', 'item', 'description', 'quantity', 'cost_cents', 'status']
    list_filter = ['status', 'vendor']
    search_fields = ['quote__reference_number', 'vendor__name', 'item__name', 'description']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(JobCost)
class JobCostAdmin(admin.ModelAdmin):
    list_display = ['quote', 'vendor', 'vendor_category', 'projected_cost_cents', 'actual_cost_cents']
    list_filter = ['vendor_category']
    search_fields = ['quote__reference_number', 'vendor__name']
    readonly_fields = ['created_at', 'updated_at']
