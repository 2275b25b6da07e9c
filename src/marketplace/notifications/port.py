"""Notification sink port (abstract interface).

The ledger never talks to a sink directly; an event handler translates
request events into ``notify`` calls. Adapters decide where the message goes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Notification:
    """One message addressed to a single user."""

    recipient_id: str
    kind: str
    message: str
    context: dict = field(default_factory=dict)


class NotificationSink(ABC):
    """Abstract notification sink."""

    @abstractmethod
    def notify(self, recipient_id: str, kind: str, message: str, **context) -> Notification:
        """Deliver a message to ``recipient_id``."""
        ...
