"""Build notification over HTTP POST.

This module posts a build status message to a chat endpoint when a CI
build finishes. It includes:

- NotifierConfig: Operator configuration (endpoint URL, extra headers)
- Message composition for failed and finished builds, with install links
- NotificationClient: Single-shot HTTP POST with fixed timeouts
- notify_build: The build step, which never fails the monitored build

Usage:
    from http_post_notifier.notifier import NotifierConfig, notify_build

    config = NotifierConfig(url="https://talk.example.com/api/send")
    report = notify_build(outcome, "dev@example.com", config)
"""

from __future__ import annotations

from http_post_notifier.notifier.client import (
    DeliveryResult,
    NotificationClient,
)
from http_post_notifier.notifier.config import (
    NotifierConfig,
    check_headers,
    check_url,
)
from http_post_notifier.notifier.headers import (
    HeaderParseError,
    parse_headers,
    validate_headers,
)
from http_post_notifier.notifier.messages import (
    compose_failure_message,
    compose_message,
    compose_success_message,
    install_links,
)
from http_post_notifier.notifier.payload import (
    NotificationPayload,
    parse_recipients,
)
from http_post_notifier.notifier.publisher import (
    NotificationReport,
    notify_build,
)

__all__ = [
    # Client
    "DeliveryResult",
    "NotificationClient",
    # Config
    "NotifierConfig",
    "check_headers",
    "check_url",
    # Headers
    "HeaderParseError",
    "parse_headers",
    "validate_headers",
    # Messages
    "compose_failure_message",
    "compose_message",
    "compose_success_message",
    "install_links",
    # Payload
    "NotificationPayload",
    "parse_recipients",
    # Build step
    "NotificationReport",
    "notify_build",
]
