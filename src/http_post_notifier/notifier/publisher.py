"""Build step that posts a notification when a build finishes.

``notify_build`` is the whole step: it checks that the notifier is
configured, picks the failure or success message for the build, and sends
it. The step always reports success to the caller. A missing URL, missing
recipients or a failed request is written to the build console and never
fails the build being monitored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from http_post_notifier.core.build import BuildOutcome
from http_post_notifier.core.console import BuildConsole
from http_post_notifier.notifier.client import DeliveryResult, NotificationClient
from http_post_notifier.notifier.config import NotifierConfig
from http_post_notifier.notifier.messages import compose_failure_message, compose_success_message
from http_post_notifier.notifier.payload import NotificationPayload, parse_recipients

logger = logging.getLogger(__name__)

NO_URL_MESSAGE = "HTTP POST: No URL specified"
NO_RECIPIENTS_MESSAGE = "HTTP POST: No recipients specified"


@dataclass
class NotificationReport:
    """What the build step did.

    Attributes:
        success: Step status reported to the host; always True.
        lines: Build console lines written during the step.
        delivery: Result of the HTTP request, or None if nothing was sent.
        skipped_reason: Why sending was skipped, if it was.
    """

    success: bool = True
    lines: list[str] = field(default_factory=list)
    delivery: DeliveryResult | None = None
    skipped_reason: str | None = None

    @property
    def sent(self) -> bool:
        """Whether a request was attempted."""
        return self.delivery is not None


def notify_build(
    outcome: BuildOutcome,
    recipients: str | None,
    config: NotifierConfig,
    console: BuildConsole | None = None,
) -> NotificationReport:
    """Send the build notification for a finished build.

    Args:
        outcome: The finished build.
        recipients: Space-separated recipient addresses from the job settings.
        config: Operator configuration (endpoint URL and extra headers).
        console: Build console; a non-echoing one is used if omitted.

    Returns:
        NotificationReport whose ``success`` is always True.
    """
    if console is None:
        console = BuildConsole()

    if not config.is_configured:
        console.warning(NO_URL_MESSAGE)
        return NotificationReport(lines=console.lines, skipped_reason=NO_URL_MESSAGE)

    if outcome.failed:
        if not parse_recipients(recipients):
            console.warning(NO_RECIPIENTS_MESSAGE)
            return NotificationReport(lines=console.lines, skipped_reason=NO_RECIPIENTS_MESSAGE)
        content = compose_failure_message(outcome)
    else:
        content = compose_success_message(outcome)

    payload = NotificationPayload.for_recipients(recipients, content)
    logger.info(
        "Sending build notification",
        extra={
            "job": outcome.job_name,
            "build": outcome.build_number,
            "result": str(outcome.result),
        },
    )

    delivery = NotificationClient.from_config(config).send(payload, console)
    return NotificationReport(lines=console.lines, delivery=delivery)


__all__ = [
    "NO_RECIPIENTS_MESSAGE",
    "NO_URL_MESSAGE",
    "NotificationReport",
    "notify_build",
]
