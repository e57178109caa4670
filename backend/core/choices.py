"""Enumerations shared across apps"""
from django.db import models


class OfficeLocation(models.TextChoices):
    """Regional branches. Inventory, quotes and availability are always scoped to one office."""
    DALLAS = 'dallas', 'Dallas'
    MIAMI = 'miami', 'Miami'
    PHOENIX = 'phoenix', 'Phoenix'
    MINNEAPOLIS = 'minneapolis', 'Minneapolis'
