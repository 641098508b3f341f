# services/notifications.py
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)


class Notifier:
    """
    Best-effort user notifications.

    ``notify`` never raises: delivery problems are logged and reported as a
    False return value, which callers are free to ignore. Delivery is gated by
    ``settings.NOTIFICATIONS_ENABLED`` in place of a user permission prompt.
    """

    def deliver(self, title: str, body: str) -> None:
        logger.info(f"Notification: {title} - {body}")

    def notify(self, title: str, body: str) -> bool:
        if not settings.NOTIFICATIONS_ENABLED:
            logger.debug(f"Notifications disabled, dropping '{title}'")
            return False
        try:
            self.deliver(title, body)
        except Exception as e:
            logger.warning(f"Notification '{title}' not delivered: {e}")
            return False
        return True


notifier = Notifier()
