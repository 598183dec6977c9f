# storefront/tasks/orphans.py
from datetime import datetime, timezone, timedelta

from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.repos.order_repo import OrderRepo
from storefront.utils.settings import ORPHAN_ORDER_GRACE_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def purge_orphaned_orders(db, grace_seconds: int = ORPHAN_ORDER_GRACE_SECONDS) -> int:
    """
    Kompensacja: usuwa naglowki 'pending' bez pozycji starsze niz grace_seconds
    (np. po zerwanym polaczeniu w trakcie zapisu).
    """
    cutoff = datetime.now(timezone.utc) - timedelta(seconds=grace_seconds)
    deleted = OrderRepo(db).delete_orphaned_pending(cutoff)
    logger.info(f"Purged {deleted} orphaned pending orders older than {cutoff.isoformat()}")
    return deleted


@celery_app.task(name="storefront.tasks.orphans.purge_orphaned_orders_task")
def purge_orphaned_orders_task():
    logger.info("Purge orphaned orders task started")

    db = SessionLocal()
    try:
        return purge_orphaned_orders(db)
    finally:
        db.close()
