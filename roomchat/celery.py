import os
from celery import Celery

# Use development settings by default for local development
settings_module = os.environ.get('DJANGO_SETTINGS_MODULE', 'roomchat.config.development')
os.environ.setdefault('DJANGO_SETTINGS_MODULE', settings_module)

app = Celery('roomchat')

# namespace='CELERY' means all celery-related configuration keys
# should have a `CELERY_` prefix.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps.
app.autodiscover_tasks()
