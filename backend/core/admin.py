from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, AuditLog


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['username', 'email', 'home_office', 'is_active', 'is_staff']
    list_filter = ['home_office', 'is_active', 'is_staff']
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Office', {'fields': ('home_office', 'phone')}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Office', {'fields': ('home_office',)}),
    )


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ['created_at', 'user', 'action', 'object_reference', 'object_name']
    list_filter = ['action', 'model_name']
    search_fields = ['object_reference', 'object_name', 'user__username']
    readonly_fields = [f.name for f in AuditLog._meta.fields]
