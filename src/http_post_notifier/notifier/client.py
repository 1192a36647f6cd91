"""Notification client for sending a single HTTP POST to the chat endpoint.

This module provides the NotificationClient class that handles delivery of
one notification with:
- Configured extra headers applied to every request
- A form-encoded body carrying the JSON payload (``payload=<json>``)
- Fixed connect and read timeouts
- Request and response lines written to the build console

Delivery is fire-and-forget: a failed request is recorded in the returned
DeliveryResult and in the console, never raised to the caller. There are no
retries.

Example:
    >>> client = NotificationClient("https://talk.example.com/api/send")
    >>> result = client.send(NotificationPayload(email_list=["a@example.com"]))
    >>> result.success
    True
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import httpx

from http_post_notifier.core.console import BuildConsole
from http_post_notifier.notifier.config import NotifierConfig
from http_post_notifier.notifier.headers import mask_header_value
from http_post_notifier.notifier.payload import NotificationPayload

logger = logging.getLogger(__name__)

# Fixed timeouts (seconds)
CONNECT_TIMEOUT = 30.0
READ_TIMEOUT = 60.0
REQUEST_TIMEOUT = httpx.Timeout(READ_TIMEOUT, connect=CONNECT_TIMEOUT)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


# =============================================================================
# Result Types
# =============================================================================


@dataclass
class DeliveryResult:
    """Result of a notification delivery attempt.

    Attributes:
        success: Whether the endpoint answered with a 2xx status.
        status_code: HTTP status code from the response.
        reason: HTTP reason phrase from the response.
        response_body: Response body content.
        elapsed_ms: Time taken for the request in milliseconds.
        error: Description of the failure, if any.
    """

    success: bool
    status_code: int | None = None
    reason: str | None = None
    response_body: str | None = None
    elapsed_ms: float = 0.0
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for logging/serialization."""
        return {
            "success": self.success,
            "status_code": self.status_code,
            "reason": self.reason,
            "elapsed_ms": self.elapsed_ms,
            "error": self.error,
        }


# =============================================================================
# NotificationClient
# =============================================================================


class NotificationClient:
    """HTTP client for posting build notifications.

    A new ``httpx.Client`` is created for every send, so instances hold no
    connection state and can be used from concurrent builds.

    Attributes:
        url: The notification endpoint URL.
        headers: Extra ``(name, value)`` headers, in configured order.
    """

    def __init__(self, url: str, headers: Iterable[tuple[str, str]] | None = None) -> None:
        """Initialize the notification client.

        Args:
            url: The notification endpoint URL.
            headers: Extra headers; a repeated name replaces the earlier value.

        Raises:
            ValueError: If URL is empty or not http(s).
        """
        if not url:
            raise ValueError("Notification URL cannot be empty")

        if not url.startswith(("http://", "https://")):
            raise ValueError(f"Invalid notification URL scheme: {url}")

        self.url = url
        self.headers = list(headers or [])

    @classmethod
    def from_config(cls, config: NotifierConfig) -> NotificationClient:
        """Create a NotificationClient from the operator configuration."""
        return cls(url=config.url, headers=config.header_items)

    def build_request(self, payload: NotificationPayload) -> httpx.Request:
        """Build the POST request for a payload.

        The form content type is applied after the configured headers, so it
        always describes the body actually sent.
        """
        headers = httpx.Headers()
        for name, value in self.headers:
            headers[name] = value
        headers["Content-Type"] = FORM_CONTENT_TYPE

        return httpx.Request(
            "POST",
            self.url,
            headers=headers,
            data=payload.form_fields(),
        )

    def send(
        self,
        payload: NotificationPayload,
        console: BuildConsole | None = None,
    ) -> DeliveryResult:
        """Send a notification synchronously.

        Args:
            payload: The notification to send.
            console: Build console receiving the request/response lines.

        Returns:
            DeliveryResult with delivery status and details. Transport errors
            are captured here, not raised.
        """
        if console is None:
            console = BuildConsole()

        request = self.build_request(payload)

        console.println(f"---> POST {self.url}")
        for name, value in self.headers:
            console.detail(f"{name}: {mask_header_value(name, value)}")

        start_time = time.monotonic()
        try:
            with httpx.Client(timeout=REQUEST_TIMEOUT) as client:
                response = client.send(request)
                response_body = response.text

        except httpx.TimeoutException as e:
            return self._failure(
                f"Notification timed out (connect {CONNECT_TIMEOUT:g}s, read {READ_TIMEOUT:g}s)",
                e,
                start_time,
                console,
            )

        except httpx.ConnectError as e:
            return self._failure(f"Failed to connect to {self.url}", e, start_time, console)

        except httpx.RequestError as e:
            return self._failure(f"Notification request failed: {e}", e, start_time, console)

        except Exception as e:
            return self._failure(
                f"Unexpected error sending notification: {e}", e, start_time, console
            )

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status_code = response.status_code
        reason = response.reason_phrase

        console.println(f"<--- {status_code} {reason} ({elapsed_ms:.0f}ms)")
        if response_body:
            console.println(response_body)

        success = 200 <= status_code < 300
        if success:
            logger.debug(
                "Notification delivered",
                extra={"url": self.url, "status": status_code, "elapsed_ms": elapsed_ms},
            )
        else:
            logger.warning(
                "Notification endpoint returned an error status",
                extra={"url": self.url, "status": status_code, "elapsed_ms": elapsed_ms},
            )

        return DeliveryResult(
            success=success,
            status_code=status_code,
            reason=reason,
            response_body=response_body,
            elapsed_ms=elapsed_ms,
            error=None if success else f"HTTP {status_code}: {response_body[:200]}",
        )

    def _failure(
        self,
        message: str,
        exc: Exception,
        start_time: float,
        console: BuildConsole,
    ) -> DeliveryResult:
        """Record a failed delivery in the console and the log."""
        elapsed_ms = (time.monotonic() - start_time) * 1000
        console.error(message)
        console.print_exception(exc)
        logger.warning(
            "Notification delivery failed",
            extra={"url": self.url, "error": str(exc), "elapsed_ms": elapsed_ms},
        )
        return DeliveryResult(success=False, elapsed_ms=elapsed_ms, error=message)

    def __repr__(self) -> str:
        """Return string representation of the client."""
        return f"NotificationClient(url={self.url!r}, headers={len(self.headers)})"


__all__ = [
    "CONNECT_TIMEOUT",
    "DeliveryResult",
    "FORM_CONTENT_TYPE",
    "NotificationClient",
    "READ_TIMEOUT",
]
