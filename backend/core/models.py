from django.contrib.auth.models import AbstractUser
from django.db import models
from .choices import OfficeLocation


class User(AbstractUser):
    """Staff account. home_office is the branch a planner or warehouse lead works out of."""
    phone = models.CharField(max_length=20, blank=True, null=True)
    home_office = models.CharField(max_length=20, choices=OfficeLocation.choices, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'


class AuditLog(models.Model):
    """Trail of quote and asset unit changes"""

    class Action(models.TextChoices):
        QUOTE_CREATE = 'quote_create', 'Quote Created'
        QUOTE_UPDATE = 'quote_update', 'Quote Updated'
        QUOTE_DELETE = 'quote_delete', 'Quote Deleted'
        QUOTE_STATUS = 'quote_status', 'Quote Status Changed'
        UNIT_CREATE = 'unit_create', 'Asset Unit Created'
        UNIT_UPDATE = 'unit_update', 'Asset Unit Updated'
        UNIT_DELETE = 'unit_delete', 'Asset Unit Deleted'
        UNIT_STATUS = 'unit_status', 'Asset Unit Status Changed'

    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='audit_logs')
    action = models.CharField(max_length=30, choices=Action.choices)
    model_name = models.CharField(max_length=50)
    object_id = models.CharField(max_length=50)
    object_name = models.CharField(max_length=255, blank=True, null=True, help_text="Client name or catalog item name")
    object_reference = models.CharField(max_length=100, blank=True, null=True, help_text="Quote reference number or asset tag")
    changes = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='idx_audit_created'),
            models.Index(fields=['action'], name='idx_audit_action'),
            models.Index(fields=['model_name'], name='idx_audit_model'),
            models.Index(fields=['object_reference'], name='idx_audit_reference'),
        ]

    def __str__(self):
        return f"{self.get_action_display()} {self.object_reference or self.object_id}"
