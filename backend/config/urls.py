"""
URL configuration for the AV rental backend.

Every app mounts its routes under /api/v1/.
"""
from django.contrib import admin
from django.urls import path, include, re_path
from django.conf import settings
from django.views.static import serve

admin.site.site_header = "AV Rental Management Admin Panel"
admin.site.site_title = "AV Rental Management Admin Portal"
admin.site.index_title = "Welcome to the AV Rental Admin"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('backend.core.urls')),
    path('api/v1/', include('backend.catalog.urls')),
    path('api/v1/', include('backend.inventory.urls')),
    path('api/v1/', include('backend.parties.urls')),
    path('api/v1/', include('backend.quotes.urls')),
    path('api/v1/', include('backend.bookings.urls')),
    path('api/v1/', include('backend.pricing.urls')),
    path('api/v1/', include('backend.purchasing.urls')),
    path('api/v1/', include('backend.reports.urls')),
    re_path(r'^media/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
    re_path(r'^static/(?P<path>.*)$', serve, {'document_root': settings.STATIC_ROOT}),
]
