# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski importowane jawnie, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "storefront.tasks.orphans",
    "storefront.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "purge-orphaned-orders-every-5-minutes": {
        "task": "storefront.tasks.orphans.purge_orphaned_orders_task",
        "schedule": 300.0,
    },
}

celery_app.conf.timezone = "UTC"
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
