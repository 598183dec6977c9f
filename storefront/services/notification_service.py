# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienie o zlozonym zamowieniu.
    Wysylane asynchronicznie przez Celery.
    """

    @staticmethod
    def send_order_notification(user_id: str, order_id: str):
        send_order_notification_task.delay(user_id, order_id)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str):
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} placed successfully")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
