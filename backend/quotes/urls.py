from django.urls import path
from .views import (
    quote_list_create, quote_detail, confirmed_quote_list,
    quote_status_update, quote_prep, quote_pull_list
)

urlpatterns = [
    path('quotes/', quote_list_create, name='quote-list-create'),
    path('quotes/confirmed/', confirmed_quote_list, name='quote-confirmed-list'),
    path('quotes/<int:pk>/', quote_detail, name='quote-detail'),
    path('quotes/<int:pk>/status/', quote_status_update, name='quote-status-update'),
    path('quotes/<int:pk>/prep/', quote_prep, name='quote-prep'),
    path('quotes/<int:pk>/pull-list/', quote_pull_list, name='quote-pull-list'),
]
