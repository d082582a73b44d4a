"""
Email service for sending transactional emails.

WHAT: A provider-agnostic interface for sending the contact-form emails:
the owner notification and the submitter acknowledgement.

HOW: Uses the Resend API when an API key is configured and a logging mock
provider otherwise. Providers report per-recipient acceptance so callers
can fail on rejected recipients.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from records_api.core.config import settings


logger = logging.getLogger(__name__)


class EmailType(str, Enum):
    """Types of transactional emails."""

    CONTACT_OWNER = "contact_owner"
    """Notification to the site owner about a contact submission."""

    CONTACT_ACKNOWLEDGEMENT = "contact_acknowledgement"
    """Acknowledgement sent back to the submitter."""


@dataclass
class EmailMessage:
    """
    Represents an email to be sent.
    """

    to_email: str
    """Recipient email address."""

    subject: str
    """Email subject line."""

    html_content: str
    """HTML email body."""

    text_content: Optional[str] = None
    """Plain text fallback."""

    from_email: Optional[str] = None
    """Sender email (defaults to the provider's sender)."""

    reply_to: Optional[str] = None
    """Reply-to address."""

    email_type: EmailType = EmailType.CONTACT_OWNER
    """Type of email for logging."""


@dataclass
class EmailResult:
    """
    Result of an email send operation.

    ``accepted`` and ``rejected`` list recipient addresses; a send with any
    rejected recipient did not fully succeed even when ``success`` is True.
    """

    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None
    provider: Optional[str] = None
    accepted: List[str] = field(default_factory=list)
    rejected: List[str] = field(default_factory=list)

    @property
    def delivered(self) -> bool:
        return self.success and not self.rejected

    def summary(self) -> Dict[str, Any]:
        """Client-safe description of the send."""
        return {
            "messageId": self.message_id,
            "accepted": list(self.accepted),
            "rejected": list(self.rejected),
            "provider": self.provider,
        }


class EmailProvider(ABC):
    """
    Abstract base class for email providers.
    """

    @abstractmethod
    async def send(self, message: EmailMessage) -> EmailResult:
        """
        Send an email message.

        Args:
            message: The email message to send

        Returns:
            EmailResult with success status and provider details
        """
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """
        Check if this provider is properly configured.

        Returns:
            True if API keys/credentials are present
        """
        pass


class ResendProvider(EmailProvider):
    """
    Resend email provider implementation.
    """

    API_URL = "https://api.resend.com/emails"

    def __init__(self, api_key: Optional[str] = None, default_from: Optional[str] = None):
        """
        Initialize Resend provider.

        Args:
            api_key: Resend API key (defaults to settings)
            default_from: Sender used when a message has none (defaults to settings)
        """
        self._api_key = api_key or settings.RESEND_API_KEY
        self._default_from = default_from or settings.MAIL_FROM or f"{settings.APP_NAME} <{settings.OWNER_EMAIL}>"

    def is_configured(self) -> bool:
        """Check if Resend API key is configured."""
        return bool(self._api_key)

    async def send(self, message: EmailMessage) -> EmailResult:
        """
        Send email via Resend API.

        A non-2xx response or a transport error marks the recipient as rejected.

        Args:
            message: Email message to send

        Returns:
            EmailResult with send status
        """
        if not self.is_configured():
            return EmailResult(
                success=False,
                error="Resend API key not configured",
                provider="resend",
                rejected=[message.to_email],
            )

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.API_URL,
                    headers={
                        "Authorization": f"Bearer {self._api_key}",
                        "Content-Type": "application/json",
                    },
                    json={
                        "from": message.from_email or self._default_from,
                        "to": [message.to_email],
                        "subject": message.subject,
                        "html": message.html_content,
                        "text": message.text_content,
                        "reply_to": message.reply_to,
                    },
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logger.error(f"Resend send error: {e}")
            return EmailResult(
                success=False,
                error=str(e),
                provider="resend",
                rejected=[message.to_email],
            )

        if response.status_code in (200, 201):
            data = response.json()
            return EmailResult(
                success=True,
                message_id=data.get("id"),
                provider="resend",
                accepted=[message.to_email],
            )
        return EmailResult(
            success=False,
            error=f"Resend API error: {response.status_code} - {response.text}",
            provider="resend",
            rejected=[message.to_email],
        )


class MockEmailProvider(EmailProvider):
    """
    Mock email provider for testing and development.

    Logs emails instead of sending them.
    """

    sent_emails: List[EmailMessage] = []
    """Class-level list to track sent emails for testing."""

    max_tracked: int = 100
    """Only the most recent sends are kept in sent_emails."""

    def is_configured(self) -> bool:
        """Mock provider is always configured."""
        return True

    async def send(self, message: EmailMessage) -> EmailResult:
        """
        Mock send - logs email instead of sending.

        Args:
            message: Email message to "send"

        Returns:
            Always returns success
        """
        logger.info(
            f"[MOCK EMAIL] To: {message.to_email}, "
            f"Subject: {message.subject}, "
            f"Type: {message.email_type.value}"
        )

        MockEmailProvider.sent_emails.append(message)
        del MockEmailProvider.sent_emails[:-MockEmailProvider.max_tracked]

        return EmailResult(
            success=True,
            message_id=f"mock-{datetime.utcnow().timestamp()}",
            provider="mock",
            accepted=[message.to_email],
        )

    @classmethod
    def clear_sent_emails(cls):
        """Clear sent emails list (for test cleanup)."""
        cls.sent_emails = []


class EmailService:
    """
    High-level email service: picks a provider and logs every send.
    """

    def __init__(self, provider: Optional[EmailProvider] = None):
        """
        Initialize email service.

        Args:
            provider: Email provider to use (auto-detected if not provided)
        """
        if provider:
            self._provider = provider
        elif settings.RESEND_API_KEY:
            self._provider = ResendProvider()
        else:
            logger.warning("No email provider configured, using mock provider")
            self._provider = MockEmailProvider()

    @property
    def provider(self) -> EmailProvider:
        return self._provider

    async def send_email(self, message: EmailMessage) -> EmailResult:
        """
        Send an email message.

        Args:
            message: Email message to send

        Returns:
            EmailResult with send status
        """
        logger.info(
            f"Sending {message.email_type.value} email to {message.to_email}",
            extra={
                "email_type": message.email_type.value,
                "to": message.to_email,
            },
        )

        result = await self._provider.send(message)

        if result.delivered:
            logger.info(
                f"Email sent successfully: {result.message_id}",
                extra={
                    "message_id": result.message_id,
                    "provider": result.provider,
                },
            )
        else:
            logger.error(
                f"Email send failed: {result.error or 'rejected recipients'}",
                extra={
                    "email_type": message.email_type.value,
                    "to": message.to_email,
                    "rejected": result.rejected,
                },
            )

        return result


_email_service: Optional[EmailService] = None


def get_email_service() -> EmailService:
    """
    Get or create the global email service instance.

    Returns:
        EmailService instance
    """
    global _email_service

    if _email_service is None:
        _email_service = EmailService()

    return _email_service
