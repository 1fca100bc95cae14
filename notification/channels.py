#!/usr/bin/env python3
"""
Notification Channels

Channels deliver an already-rendered message. The email channel talks to a
Resend-compatible HTTP API:

    POST {api_url}  {"from", "to", "subject", "html", "text"}  ->  {"id": ...}

Usage:
    channel = EmailChannel(api_key=..., from_email="noreply@example.com")
    result = channel.send("candidate@example.com", subject, text_body,
                          {"html": html_body, "from_name": "Acme"})
    if result:
        print(result.message_id)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Optional
import logging
import os

import requests

from notification.message_builder import NotificationMessageBuilder

logger = logging.getLogger(__name__)

DEFAULT_EMAIL_API_URL = "https://api.resend.com/emails"


def _is_dry_run_mode() -> bool:
    """Check if notification channels should run in dry-run (log-only) mode."""
    return os.environ.get('NOTIFICATION_DRY_RUN', '').lower() in ('true', '1', 'yes')


def _mask_email(email: str) -> str:
    """
    Mask email address for safe logging (PII protection).

    Shows only domain, e.g., "***@example.com"
    """
    if '@' not in email:
        return "***"
    local, domain = email.rsplit('@', 1)
    return f"***@{domain}"


@dataclass
class DeliveryResult:
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success


class NotificationChannel(ABC):
    """
    Abstract base class for all notification channels.
    """

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Return the channel type identifier."""
        pass

    @abstractmethod
    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> DeliveryResult:
        """
        Send a notification through this channel.

        Args:
            recipient: Target recipient (format depends on channel)
            subject: Notification subject/title
            body: Plain-text notification body
            metadata: Additional channel-specific metadata

        Returns:
            DeliveryResult; falsy when the send failed
        """
        pass

    def validate_config(self) -> bool:
        return True


class EmailChannel(NotificationChannel):
    """Email notification channel via an HTTP email-provider API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_email: str = "noreply@example.com",
        api_url: str = DEFAULT_EMAIL_API_URL,
        timeout: int = 30,
        dry_run: bool = False,
        session: Optional[requests.Session] = None
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.api_url = api_url
        self.timeout = timeout
        self.dry_run = dry_run or _is_dry_run_mode()
        self._http = session or requests.Session()

    @property
    def channel_type(self) -> str:
        return 'email'

    def validate_config(self) -> bool:
        return bool(self.api_key and self.from_email)

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> DeliveryResult:
        from_header = NotificationMessageBuilder.from_header(self.from_email, metadata.get('from_name'))

        if self.dry_run:
            logger.info(f"[DRY RUN] Email '{subject}' to {_mask_email(recipient)} from {from_header}")
            return DeliveryResult(success=True, message_id=None)

        if not self.validate_config():
            logger.error("Email not configured - provider API key or sender address missing")
            return DeliveryResult(success=False, error="Email provider not configured")

        payload = {
            'from': from_header,
            'to': recipient,
            'subject': subject,
            'html': metadata.get('html') or body,
            'text': body,
        }

        try:
            response = self._http.post(
                self.api_url,
                json=payload,
                headers={'Authorization': f"Bearer {self.api_key}"},
                timeout=self.timeout
            )
            response.raise_for_status()
            message_id = (response.json() or {}).get('id')

            logger.info(f"Email sent to {_mask_email(recipient)} (id={message_id})")
            return DeliveryResult(success=True, message_id=message_id)

        except (requests.RequestException, ValueError) as e:
            logger.error(f"Failed to send email to {_mask_email(recipient)}: {e}")
            return DeliveryResult(success=False, error=str(e))
