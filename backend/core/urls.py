from django.urls import path
from . import views

urlpatterns = [
    path('auth/register/', views.register, name='register'),
    path('auth/login/', views.OfficeTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/refresh/', views.SafeTokenRefreshView.as_view(), name='token_refresh'),
    path('auth/me/', views.user_me, name='user-me'),

    path('audit-logs/', views.audit_log_list, name='audit-log-list'),
    path('audit-logs/<int:pk>/', views.audit_log_detail, name='audit-log-detail'),

    path('search/', views.global_search, name='global-search'),
]
