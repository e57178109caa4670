#!/usr/bin/env python
"""
Run the whole backend test suite with Django's test runner.
Usage: python Doc/run_tests.py (from the repository root)
"""
import os
import sys
from pathlib import Path

import django
from django.conf import settings
from django.test.utils import get_runner

APPS = [
    'backend.core',
    'backend.catalog',
    'backend.inventory',
    'backend.parties',
    'backend.quotes',
    'backend.bookings',
    'backend.pricing',
    'backend.purchasing',
    'backend.reports',
]

if __name__ == "__main__":
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'backend.config.settings')
    django.setup()
    TestRunner = get_runner(settings)
    test_runner = TestRunner()
    failures = test_runner.run_tests(sys.argv[1:] or APPS)
    sys.exit(bool(failures))
