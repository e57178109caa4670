from django.urls import path
from .views import quote_totals_preview

urlpatterns = [
    path('pricing/quote-totals/', quote_totals_preview, name='pricing-quote-totals'),
]
