"""Recording notification sink — keeps messages in memory for test assertions."""

from marketplace.notifications.port import Notification, NotificationSink


class RecordingNotificationSink(NotificationSink):
    def __init__(self):
        self.sent: list[Notification] = []

    def notify(self, recipient_id: str, kind: str, message: str, **context) -> Notification:
        notification = Notification(recipient_id=str(recipient_id), kind=kind, message=message, context=context)
        self.sent.append(notification)
        return notification

    def for_recipient(self, recipient_id: str) -> list[Notification]:
        return [n for n in self.sent if n.recipient_id == str(recipient_id)]

    def kinds(self) -> list[str]:
        return [n.kind for n in self.sent]

    def reset(self):
        """Clear recorded notifications (useful between tests)."""
        self.sent.clear()
