from django.core.exceptions import ValidationError
from django.db import models
from backend.catalog.models import CatalogItem
from backend.core.models import User
from backend.parties.models import Client


class Booking(models.Model):
    """
    Calendar hold of a catalog item for a client over a date range.

    A booking names no quantity or office, so it is a scheduling note and
    does not reduce availability; equipment is reserved by approved quotes.
    """

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        CONFIRMED = 'confirmed', 'Confirmed'
        CANCELLED = 'cancelled', 'Cancelled'

    equipment = models.ForeignKey(CatalogItem, on_delete=models.PROTECT, related_name='bookings')
    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name='bookings')
    start_date = models.DateField(db_index=True)
    end_date = models.DateField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.CONFIRMED, db_index=True)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='bookings')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.equipment.name} for {self.client.name} ({self.start_date} - {self.end_date})"

    def clean(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({'end_date': 'End date cannot be before start date'})

    class Meta:
        db_table = 'bookings'
        ordering = ['start_date', 'id']
        indexes = [
            models.Index(fields=['status', 'start_date'], name='idx_booking_status_start'),
        ]
