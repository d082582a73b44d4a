"""
Helpers turning service envelopes into HTTP responses.
"""

import logging

from fastapi import Response
from fastapi.responses import JSONResponse

from records_api.middleware.request_context import get_request_context
from records_api.schemas.envelope import ResponseEnvelope


logger = logging.getLogger(__name__)


def report_failure(envelope: ResponseEnvelope) -> ResponseEnvelope:
    """
    Error continuation passed to services from route handlers.

    Tags the failure with the current request ID in the logs and hands the
    envelope back unchanged so the route can send it.
    """
    context = get_request_context()
    request_id = context.request_id if context else None
    logger.info(
        f"Request {request_id} answered {envelope.status}: {envelope.error}",
        extra={"request_id": request_id, "status": envelope.status},
    )
    return envelope


def envelope_response(envelope: ResponseEnvelope) -> Response:
    """
    Serialize an envelope with its own status as the HTTP status.

    A 204 envelope is sent without a body.
    """
    if envelope.status == 204:
        return Response(status_code=204)
    return JSONResponse(status_code=envelope.status, content=envelope.model_dump(mode="json"))
