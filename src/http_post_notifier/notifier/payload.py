"""Notification payload sent to the chat endpoint.

The endpoint expects a fixed-shape JSON record carried in a single form
field named ``payload``. Field names on the wire are camelCase.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

SERVICE_ID = "ncs"
BOT_NO = 9
MESSAGE_TYPE = 5
PUSH_ENABLED = 1

# Name of the form field carrying the JSON record
PAYLOAD_FIELD = "payload"


def parse_recipients(recipients: str | None) -> list[str]:
    """Split a space-separated recipient string into addresses."""
    if not recipients:
        return []
    return recipients.split()


@dataclass(frozen=True)
class NotificationPayload:
    """A single chat notification.

    Attributes:
        email_list: Recipient addresses.
        content: Message text.
        service_id: Sending service identifier.
        bot_no: Bot account number.
        type: Message type code.
        push: Whether to push to devices (1) or not (0).
    """

    email_list: list[str] = field(default_factory=list)
    content: str = ""
    service_id: str = SERVICE_ID
    bot_no: int = BOT_NO
    type: int = MESSAGE_TYPE
    push: int = PUSH_ENABLED

    @classmethod
    def for_recipients(cls, recipients: str | None, content: str) -> NotificationPayload:
        """Build a payload from a space-separated recipient string."""
        return cls(email_list=parse_recipients(recipients), content=content)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire record, keyed in camelCase."""
        return {
            "serviceId": self.service_id,
            "botNo": self.bot_no,
            "emailList": list(self.email_list),
            "content": self.content,
            "type": self.type,
            "push": self.push,
        }

    def to_json(self) -> str:
        """Serialize the wire record to compact JSON."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    def form_fields(self) -> dict[str, str]:
        """Form fields for the request body: ``{"payload": <json>}``."""
        return {PAYLOAD_FIELD: self.to_json()}


__all__ = [
    "NotificationPayload",
    "PAYLOAD_FIELD",
    "parse_recipients",
]
