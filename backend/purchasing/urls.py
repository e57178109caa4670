from django.urls import path
from .views import (
    subrental_list_create, subrental_detail, quote_subrentals,
    job_cost_list_create, job_cost_detail, quote_costs
)

urlpatterns = [
    # Subrental endpoints
    path('subrentals/', subrental_list_create, name='subrental-list-create'),
    path('subrentals/<int:pk>/', subrental_detail, name='subrental-detail'),
    path('quotes/<int:pk>/subrentals/', quote_subrentals, name='quote-subrentals'),

    # Job cost endpoints
    path('costs/', job_cost_list_create, name='job-cost-list-create'),
    path('costs/<int:pk>/', job_cost_detail, name='job-cost-detail'),
    path('quotes/<int:pk>/costs/', quote_costs, name='quote-costs'),
]
