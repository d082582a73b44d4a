"""
Record service: CRUD orchestration for sample records.

WHAT: Validates incoming requests, calls the data-access controller and
normalizes its results into response envelopes.

HOW: Every method runs validate → normalize input → controller call →
failure check → normalize output. Any AppException raised along the way
(missing input, schema violation, controller Failure) is folded into a
500 envelope whose message is prefixed with ``[RecordService] <method>:``
and handed to the caller's error continuation.
"""

from typing import Any, Optional

from records_api.core.exceptions import AppException, ControllerError, ValidationError
from records_api.core.validation import validate_payload
from records_api.dao.result import ControllerResult, RecordController
from records_api.schemas.envelope import ServiceRequest
from records_api.schemas.record import RecordCreate, RecordUpdate
from records_api.services.root import ErrorContinuation, RootService
from records_api.utils.query import build_query, build_wildcard_options


def unwrap(result: ControllerResult) -> Any:
    """
    Return the value of a controller result.

    Raises:
        ControllerError: If the controller reported a failure
    """
    if result.failed:
        raise ControllerError(result.error)
    return result.value


class RecordService(RootService):
    """
    CRUD operations for sample records.

    Example:
        service = RecordService(RecordDAO(session))
        envelope = await service.read_record_by_id(ServiceRequest(params={"id": "3"}))
    """

    service_name = "RecordService"

    def __init__(self, controller: RecordController, update_event: Optional[str] = None):
        """
        Args:
            controller: Data-access controller for sample records
            update_event: Event name logged with every successful update
        """
        self.controller = controller
        self.update_event = update_event

    @staticmethod
    def _record_id(request: ServiceRequest) -> Any:
        record_id = (request.params or {}).get("id")
        if record_id is None or record_id == "":
            raise ValidationError("Invalid ID supplied.")
        return record_id

    async def create_record(
        self, request: ServiceRequest, next_handler: Optional[ErrorContinuation] = None
    ) -> Any:
        try:
            body = dict(request.body or {})
            if not body:
                raise ValidationError("Data is required to create.")

            body.pop("id", None)
            validate_payload(RecordCreate, body)

            result = await self.controller.create_record(body)
            return self.process_single_read(unwrap(result))
        except AppException as e:
            return await self.fail("create_record", e, next_handler)

    async def read_record_by_id(
        self, request: ServiceRequest, next_handler: Optional[ErrorContinuation] = None
    ) -> Any:
        try:
            record_id = self._record_id(request)

            result = await self.controller.read_records({"id": record_id, "is_active": True})
            records = unwrap(result)
            return self.process_single_read(records[0] if records else None)
        except AppException as e:
            return await self.fail("read_record_by_id", e, next_handler)

    async def read_records_by_filter(
        self, request: ServiceRequest, next_handler: Optional[ErrorContinuation] = None
    ) -> Any:
        try:
            query = dict(request.query or {})
            if not query:
                raise ValidationError("Query is required to filter.")

            result = await self.handle_database_read(self.controller, query)
            return self.process_multiple_read_results(unwrap(result))
        except AppException as e:
            return await self.fail("read_records_by_filter", e, next_handler)

    async def read_records_by_wildcard(
        self, request: ServiceRequest, next_handler: Optional[ErrorContinuation] = None
    ) -> Any:
        try:
            params = dict(request.params or {})
            query = dict(request.query or {})
            if not params or not query:
                raise ValidationError("Invalid key/keyword")

            wildcard_conditions = build_wildcard_options(params.get("keys"), params.get("keyword"))
            result = await self.handle_database_read(self.controller, query, wildcard_conditions)
            return self.process_multiple_read_results(unwrap(result))
        except AppException as e:
            return await self.fail("read_records_by_wildcard", e, next_handler)

    async def update_record_by_id(
        self, request: ServiceRequest, next_handler: Optional[ErrorContinuation] = None
    ) -> Any:
        try:
            record_id = self._record_id(request)

            data = dict(request.body or {})
            if not data:
                raise ValidationError("Update requires data.")
            validate_payload(RecordUpdate, data)

            result = await self.controller.update_records({"id": record_id}, data)
            return self.process_update_result(unwrap(result), self.update_event)
        except AppException as e:
            return await self.fail("update_record_by_id", e, next_handler)

    async def update_records(
        self, request: ServiceRequest, next_handler: Optional[ErrorContinuation] = None
    ) -> Any:
        try:
            body = request.body or {}
            options, data = body.get("options"), body.get("data")
            if not isinstance(options, dict) or not isinstance(data, dict):
                raise ValidationError("Invalid options/data")
            if not options:
                raise ValidationError("Options are required to update")
            if not data:
                raise ValidationError("Data is required to update")
            validate_payload(RecordUpdate, data)

            seek_conditions = build_query(options).seek_conditions
            if not seek_conditions:
                raise ValidationError("Options are required to update")

            result = await self.controller.update_records(dict(seek_conditions), dict(data))
            return self.process_update_result({**data, **unwrap(result)}, self.update_event)
        except AppException as e:
            return await self.fail("update_records", e, next_handler)

    async def delete_record_by_id(
        self, request: ServiceRequest, next_handler: Optional[ErrorContinuation] = None
    ) -> Any:
        try:
            record_id = self._record_id(request)

            result = await self.controller.delete_records({"id": record_id})
            return self.process_delete_result(unwrap(result))
        except AppException as e:
            return await self.fail("delete_record_by_id", e, next_handler)

    async def delete_records(
        self, request: ServiceRequest, next_handler: Optional[ErrorContinuation] = None
    ) -> Any:
        try:
            options = (request.body or {}).get("options")
            if not isinstance(options, dict) or not options:
                raise ValidationError("Options are required")

            seek_conditions = build_query(options).seek_conditions
            if not seek_conditions:
                raise ValidationError("Options are required")

            result = await self.controller.delete_records(dict(seek_conditions))
            return self.process_delete_result(dict(unwrap(result)))
        except AppException as e:
            return await self.fail("delete_records", e, next_handler)
