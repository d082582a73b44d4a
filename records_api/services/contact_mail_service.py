"""
Contact mail service.

WHAT: Handles public contact-form submissions by emailing the site owner
and acknowledging the submitter.

HOW: The submission is validated, both emails are rendered from the
Jinja2 templates and sent through EmailService. A send that reports any
rejected recipient fails the whole call; the failure is folded into an
envelope the same way the record service does it.
"""

import logging
from typing import Any, Dict, Optional

from records_api.core.config import settings
from records_api.core.exceptions import AppException, EmailServiceError
from records_api.core.validation import validate_payload
from records_api.schemas.contact import ContactSubmission
from records_api.schemas.envelope import ServiceRequest
from records_api.services.email import EmailMessage, EmailService, EmailType, get_email_service
from records_api.services.email_template_service import (
    EmailTemplateService,
    get_email_template_service,
)
from records_api.services.root import ErrorContinuation, RootService


logger = logging.getLogger(__name__)


class ContactMailService(RootService):
    """
    Sends the owner notification and the submitter acknowledgement.

    Example:
        service = ContactMailService()
        envelope = await service.process_incoming_emails(
            ServiceRequest(body={"data": {"email": "ada@example.com", "name": "Ada"}})
        )
    """

    service_name = "ContactMailService"

    def __init__(
        self,
        email_service: Optional[EmailService] = None,
        template_service: Optional[EmailTemplateService] = None,
        owner_email: Optional[str] = None,
    ):
        """
        Args:
            email_service: Mail transport (defaults to the shared EmailService)
            template_service: Template renderer (defaults to the shared one)
            owner_email: Address notified of every submission (defaults to settings.OWNER_EMAIL)
        """
        self._email_service = email_service or get_email_service()
        self._template_service = template_service or get_email_template_service()
        self._owner_email = owner_email or settings.OWNER_EMAIL

    async def _send(self, message: EmailMessage) -> Dict[str, Any]:
        result = await self._email_service.send_email(message)
        if not result.delivered:
            rejected = ", ".join(result.rejected) or message.to_email
            raise EmailServiceError(
                f"Mail to {rejected} was rejected",
                email_type=message.email_type.value,
            )
        return result.summary()

    async def process_incoming_emails(
        self, request: ServiceRequest, next_handler: Optional[ErrorContinuation] = None
    ) -> Any:
        try:
            submission = validate_payload(ContactSubmission, request.body or {})
            data = submission.data.fields
            email = submission.data.email

            subject, html, text = self._template_service.render_owner_email(data)
            mailing_owner = await self._send(
                EmailMessage(
                    to_email=self._owner_email,
                    subject=subject,
                    html_content=html,
                    text_content=text,
                    reply_to=email,
                    email_type=EmailType.CONTACT_OWNER,
                )
            )

            subject, html, text = self._template_service.render_client_email(data)
            mailing_user = await self._send(
                EmailMessage(
                    to_email=email,
                    subject=subject,
                    html_content=html,
                    text_content=text,
                    email_type=EmailType.CONTACT_ACKNOWLEDGEMENT,
                )
            )

            logger.info(f"Processed contact submission from {email}")
            return self.process_single_read(
                {"mailingOwner": mailing_owner, "mailingUser": mailing_user, "id": 1}
            )
        except AppException as e:
            return await self.fail("process_incoming_emails", e, next_handler)
