from django.db import models


class Client(models.Model):
    """Clients that quotes are written for"""
    name = models.CharField(max_length=200, db_index=True)
    company = models.CharField(max_length=200, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    address = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.company})" if self.company else self.name

    class Meta:
        db_table = 'clients'
        ordering = ['name']


class Venue(models.Model):
    """Event venues"""
    venue_name = models.CharField(max_length=200, db_index=True)
    address_line_1 = models.CharField(max_length=255, blank=True)
    address_line_2 = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True, db_index=True)
    state = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=100, blank=True, default='USA')
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.venue_name}, {self.city}" if self.city else self.venue_name

    class Meta:
        db_table = 'venues'
        ordering = ['venue_name']


class Vendor(models.Model):
    """Vendors we subrent equipment or buy services from"""

    class Category(models.TextChoices):
        AUDIO = 'audio', 'Audio'
        LIGHTING = 'lighting', 'Lighting'
        VIDEO = 'video', 'Video'
        STAGING = 'staging', 'Staging'
        TRANSPORT = 'transport', 'Transport'
        LABOR = 'labor', 'Labor'
        OTHER = 'other', 'Other'

    name = models.CharField(max_length=200, db_index=True)
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.OTHER)
    contact_name = models.CharField(max_length=200, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    website = models.URLField(blank=True)
    address = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'vendors'
        ordering = ['name']
