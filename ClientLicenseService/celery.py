"""
Celery configuration for background tasks.

Used for last_seen writes that stay off the validation path.
"""
import os

from celery import Celery

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ClientLicenseService.settings.dev")

app = Celery("ClientLicenseService")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()
