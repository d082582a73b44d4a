"""
Response normalization shared by every CRUD service.

WHAT: ``RootService`` turns raw controller values into ``ResponseEnvelope``
objects and runs filtered reads through the query builder.

HOW: The ``process_*`` methods are pure functions of their input (apart
from logging) and every one of them returns an envelope with a status.
Failures that reach ``process_update_result``/``process_delete_result`` as
``None`` are reported as 500s.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from records_api.core.exceptions import AppException
from records_api.dao.result import ControllerResult, RecordController
from records_api.schemas.envelope import ResponseEnvelope
from records_api.utils.query import build_query


logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Resource not found"
NOT_FOUND_MULTIPLE_MESSAGE = "Resources not found"
UPDATE_FAILED_MESSAGE = "Update failed"
DELETE_FAILED_MESSAGE = "Delete failed"

ErrorContinuation = Callable[[ResponseEnvelope], Union[Any, Awaitable[Any]]]
"""Receives the failure envelope; its return value becomes the method result."""


class RootService:
    """
    Base class for services that answer with response envelopes.

    Subclasses set ``service_name``; it prefixes failure messages.
    """

    service_name = "RootService"

    def process_single_read(self, record: Optional[Mapping[str, Any]]) -> ResponseEnvelope:
        """
        Envelope a single record: 404 when missing or empty, 200 otherwise.
        """
        if not record:
            return self.process_failed_response(NOT_FOUND_MESSAGE, 404)
        return self.process_successful_response(record)

    def process_multiple_read_results(self, records: Any) -> ResponseEnvelope:
        """
        Envelope a read of many records.

        Only ``None`` is a 404; an empty list is a successful read.
        """
        if records is None:
            return self.process_failed_response(NOT_FOUND_MULTIPLE_MESSAGE, 404)
        return self.process_successful_response(records)

    def process_update_result(
        self,
        result: Optional[Mapping[str, Any]],
        event_name: Optional[str] = None,
    ) -> ResponseEnvelope:
        """
        Envelope a mutation acknowledgement from an update.

        Args:
            result: ``{"ok", "nModified", "n"}``, possibly merged with the update data
            event_name: When given, a successful result is logged under this
                event name; ``"error"`` logs at ERROR level

        Returns:
            500 for a missing result, 204 with no payload when
            ``nModified`` is 0, 200 with the result otherwise (a result
            without ``nModified`` included)
        """
        if result is None:
            return self.process_failed_response(UPDATE_FAILED_MESSAGE, 500)
        if result.get("nModified") == 0:
            return ResponseEnvelope(status=204, error=None, payload=None)

        if event_name:
            level = logging.ERROR if event_name == "error" else logging.INFO
            logger.log(
                level,
                f"[{event_name}] {dict(result)}",
                extra={"event": event_name, "event_payload": dict(result)},
            )
        return self.process_successful_response(result)

    def process_delete_result(self, result: Optional[Mapping[str, Any]]) -> ResponseEnvelope:
        """
        Envelope a mutation acknowledgement from a delete.

        Same rules as process_update_result, without event logging.
        """
        if result is None:
            return self.process_failed_response(DELETE_FAILED_MESSAGE, 500)
        if result.get("nModified") == 0:
            return ResponseEnvelope(status=204, error=None, payload=None)
        return self.process_successful_response(result)

    def process_failed_response(self, message: str, status: int = 500) -> ResponseEnvelope:
        return ResponseEnvelope(status=status, error=message, payload=None)

    def process_successful_response(self, payload: Any, status: int = 200) -> ResponseEnvelope:
        return ResponseEnvelope(status=status, error=None, payload=payload)

    async def handle_database_read(
        self,
        controller: RecordController,
        filter: Mapping[str, Any],
        wildcard_conditions: Optional[Mapping[str, Any]] = None,
    ) -> ControllerResult:
        """
        Read through ``controller`` with a filter and optional wildcard conditions.

        The filter goes through build_query, so paging, sorting, projection
        and count options are honoured. The seek conditions and wildcard
        conditions are merged into one mapping.

        Returns:
            The controller's result, unmodified

        Raises:
            ValidationError: If the filter carries malformed paging options
        """
        query = build_query(filter)
        conditions = {**query.seek_conditions, **(wildcard_conditions or {})}
        return await controller.read_records(
            conditions,
            fields_to_return=query.fields_to_return,
            sort=query.sort,
            skip=query.skip,
            limit=query.limit,
            count=query.count,
        )

    async def fail(
        self,
        method: str,
        exc: AppException,
        next_handler: Optional[ErrorContinuation] = None,
    ) -> Any:
        """
        Fold an exception into a 500 envelope and hand it to ``next_handler``.

        The message is prefixed with ``[<service_name>] <method>:``. Without a
        continuation the envelope itself is returned.
        """
        envelope = self.process_failed_response(
            f"[{self.service_name}] {method}: {exc.message}",
            500,
        )
        logger.warning(envelope.error)
        if next_handler is None:
            return envelope
        outcome = next_handler(envelope)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return outcome
