"""
Sample records API endpoints.

WHAT: CRUD endpoints for sample records.

HOW: Each handler packs the request into a ServiceRequest, calls the
matching RecordService method with report_failure as the error
continuation and sends the resulting envelope with its own status code.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, Response

from records_api.api.responses import envelope_response, report_failure
from records_api.core.deps import get_record_service
from records_api.schemas.envelope import ResponseEnvelope, ServiceRequest
from records_api.services.record_service import RecordService


router = APIRouter(
    prefix="/records",
    tags=["records"],
    responses={500: {"model": ResponseEnvelope}},
)


@router.post(
    "",
    response_model=ResponseEnvelope,
    summary="Create a record",
    description="Create a sample record. Any `id` in the body is ignored; `_id` is rejected.",
)
async def create_record(
    body: Optional[Dict[str, Any]] = Body(default=None),
    service: RecordService = Depends(get_record_service),
) -> Response:
    envelope = await service.create_record(ServiceRequest(body=body or {}), report_failure)
    return envelope_response(envelope)


@router.get(
    "",
    response_model=ResponseEnvelope,
    summary="Filter records",
    description=(
        "Return active records matching every query parameter. "
        "`skip`, `limit`, `sort`, `return` and `count` control paging and projection."
    ),
)
async def read_records_by_filter(
    request: Request,
    service: RecordService = Depends(get_record_service),
) -> Response:
    envelope = await service.read_records_by_filter(
        ServiceRequest(query=dict(request.query_params)), report_failure
    )
    return envelope_response(envelope)


@router.get(
    "/search/{keys}/{keyword}",
    response_model=ResponseEnvelope,
    summary="Wildcard search",
    description=(
        "Return records where any of the comma-separated `keys` contains `keyword` "
        "(case-insensitive), further filtered by the query parameters."
    ),
)
async def read_records_by_wildcard(
    keys: str,
    keyword: str,
    request: Request,
    service: RecordService = Depends(get_record_service),
) -> Response:
    envelope = await service.read_records_by_wildcard(
        ServiceRequest(
            params={"keys": keys, "keyword": keyword},
            query=dict(request.query_params),
        ),
        report_failure,
    )
    return envelope_response(envelope)


@router.get(
    "/{id}",
    response_model=ResponseEnvelope,
    summary="Get a record",
    responses={404: {"model": ResponseEnvelope}},
)
async def read_record_by_id(
    id: str,
    service: RecordService = Depends(get_record_service),
) -> Response:
    envelope = await service.read_record_by_id(ServiceRequest(params={"id": id}), report_failure)
    return envelope_response(envelope)


@router.put(
    "",
    response_model=ResponseEnvelope,
    summary="Update records by filter",
    description="Body: `{\"options\": {...filter}, \"data\": {...changes}}`.",
)
async def update_records(
    body: Optional[Dict[str, Any]] = Body(default=None),
    service: RecordService = Depends(get_record_service),
) -> Response:
    envelope = await service.update_records(ServiceRequest(body=body or {}), report_failure)
    return envelope_response(envelope)


@router.put(
    "/{id}",
    response_model=ResponseEnvelope,
    summary="Update a record",
)
async def update_record_by_id(
    id: str,
    body: Optional[Dict[str, Any]] = Body(default=None),
    service: RecordService = Depends(get_record_service),
) -> Response:
    envelope = await service.update_record_by_id(
        ServiceRequest(body=body or {}, params={"id": id}), report_failure
    )
    return envelope_response(envelope)


@router.delete(
    "",
    response_model=ResponseEnvelope,
    summary="Delete records by filter",
    description="Body: `{\"options\": {...filter}}`. Records are soft-deleted.",
)
async def delete_records(
    body: Optional[Dict[str, Any]] = Body(default=None),
    service: RecordService = Depends(get_record_service),
) -> Response:
    envelope = await service.delete_records(ServiceRequest(body=body or {}), report_failure)
    return envelope_response(envelope)


@router.delete(
    "/{id}",
    response_model=ResponseEnvelope,
    summary="Delete a record",
)
async def delete_record_by_id(
    id: str,
    service: RecordService = Depends(get_record_service),
) -> Response:
    envelope = await service.delete_record_by_id(ServiceRequest(params={"id": id}), report_failure)
    return envelope_response(envelope)
