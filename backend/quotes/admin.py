from django.contrib import admin
from .models import Quote, QuoteSection, QuoteItem


class QuoteSectionInline(admin.TabularInline):
    model = QuoteSection
    extra = 0
    readonly_fields = ['subtotal_cents', 'tax_cents', 'total_cents']


@admin.register(Quote)
class QuoteAdmin(admin.ModelAdmin):
    list_display = ['reference_number', 'client', 'office', 'event_start_date', 'event_end_date', 'status', 'total_cents']
    list_filter = ['status', 'office']
    search_fields = ['reference_number', 'client__name', 'venue__venue_name']
    date_hierarchy = 'event_start_date'
    readonly_fields = ['reference_number', 'subtotal_cents', 'tax_cents', 'total_cents', 'created_at', 'updated_at']
    inlines = [QuoteSectionInline]


@admin.register(QuoteItem)
class QuoteItemAdmin(admin.ModelAdmin):
    list_display = ['section', 'equipment', 'custom_name', 'quantity', 'price_per_day_cents', 'number_of_days', 'is_custom']
    list_filter = ['is_custom']
    search_fields = ['section__quote__reference_number', 'equipment__name', 'custom_name']
