"""Notification sink that writes every message to the structured log."""

import structlog

from marketplace.notifications.port import Notification, NotificationSink

logger = structlog.get_logger(__name__)


class LoggingNotificationSink(NotificationSink):
    def notify(self, recipient_id: str, kind: str, message: str, **context) -> Notification:
        notification = Notification(recipient_id=str(recipient_id), kind=kind, message=message, context=context)
        logger.info("Notification sent", recipient_id=notification.recipient_id, kind=kind, message=message, **context)
        return notification
