"""
Contact form endpoint.

WHAT: ``POST /sample`` accepts a contact submission and emails the owner
and the submitter.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Response

from records_api.api.responses import envelope_response, report_failure
from records_api.core.deps import get_contact_mail_service
from records_api.schemas.envelope import ResponseEnvelope, ServiceRequest
from records_api.services.contact_mail_service import ContactMailService


router = APIRouter(prefix="/sample", tags=["sample"])


@router.post(
    "",
    response_model=ResponseEnvelope,
    summary="Submit the contact form",
    description="Body: `{\"data\": {\"email\": ..., ...}}`. Sends the owner and acknowledgement emails.",
)
async def process_incoming_emails(
    body: Optional[Dict[str, Any]] = Body(default=None),
    service: ContactMailService = Depends(get_contact_mail_service),
) -> Response:
    envelope = await service.process_incoming_emails(ServiceRequest(body=body or {}), report_failure)
    return envelope_response(envelope)
