"""Celery application for background article rendering."""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "BlogReader.settings")

app = Celery("BlogReader")

# CELERY_* values in settings.py configure the worker (broker, serializers, ...)
app.config_from_object("django.conf:settings", namespace="CELERY")

# Finds blogs.tasks once the app registry is ready
app.autodiscover_tasks()
