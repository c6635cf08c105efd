"""
Celery configuration for LabourHub.

Notification delivery and housekeeping run as Celery tasks:
- notifications.tasks.deliver_notification: fire-and-forget SMS/email sends
- accounts.tasks.purge_expired_otps: removes expired one-time passwords
"""

import os

from celery import Celery
from celery.schedules import crontab
from kombu import Exchange, Queue

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'labourhub.settings')

app = Celery('labourhub')

# namespace='CELERY' means all celery-related configuration keys
# should have a `CELERY_` prefix.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps.
app.autodiscover_tasks()


# ==================== QUEUE CONFIGURATION ====================

default_exchange = Exchange('default', type='direct')
notifications_exchange = Exchange('notifications', type='direct')

app.conf.task_queues = (
    Queue('default', default_exchange, routing_key='default'),
    Queue('notifications', notifications_exchange, routing_key='notifications'),
)

app.conf.task_default_queue = 'default'
app.conf.task_default_exchange = 'default'
app.conf.task_default_routing_key = 'default'


# ==================== TASK ROUTING ====================

app.conf.task_routes = {
    'notifications.tasks.*': {'queue': 'notifications', 'routing_key': 'notifications'},
    'accounts.tasks.*': {'queue': 'default', 'routing_key': 'default'},
}

# SMS gateways throttle aggressively
app.conf.task_annotations = {
    'notifications.tasks.deliver_notification': {'rate_limit': '100/m'},
}


# ==================== SERIALIZATION ====================

app.conf.task_serializer = 'json'
app.conf.result_serializer = 'json'
app.conf.accept_content = ['json']
app.conf.timezone = 'Asia/Kolkata'
app.conf.enable_utc = True

app.conf.task_acks_late = True
app.conf.task_reject_on_worker_lost = True


# ==================== BEAT SCHEDULE ====================

app.conf.beat_schedule = {
    'purge-expired-otps': {
        'task': 'accounts.tasks.purge_expired_otps',
        'schedule': crontab(minute='*/15'),
    },
}
