"""
Record DAO (Data Access Object).

WHAT: SQLAlchemy-backed implementation of the RecordController contract
for sample records.

WHY: Services only deal with Success/Failure results. This DAO is the one
place that turns condition mappings into SQL and database exceptions into
Failure messages.

HOW: ``id``, ``_id`` and ``is_active`` conditions compare against real
columns; every other key compares against the matching key of the ``data``
JSON column, typed by the Python type of the value. A WildcardCondition
becomes an OR of case-insensitive LIKE matches. Soft-deleted rows never
match any operation.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.core.exceptions import ValidationError
from records_api.dao.base import BaseDAO
from records_api.dao.result import ControllerResult, Failure, Success, mutation_ack
from records_api.models.record import SampleRecord
from records_api.utils.query import WILDCARD_KEY, WildcardCondition


logger = logging.getLogger(__name__)


SYSTEM_FIELDS = frozenset({"id", "_id", "is_active", "is_deleted", "created_at", "updated_at"})
"""Keys managed by the DAO; they are never written into ``data``."""

_SORTABLE_COLUMNS = {
    "id": SampleRecord.id,
    "_id": SampleRecord.storage_id,
    "is_active": SampleRecord.is_active,
    "created_at": SampleRecord.created_at,
    "updated_at": SampleRecord.updated_at,
}


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1"):
        return True
    if text in ("false", "0"):
        return False
    raise ValidationError(f"Invalid value for '{key}': {value!r}", field=key)


def _as_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid value for '{key}': {value!r}", field=key)


def _escape_like(keyword: str) -> str:
    return keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class RecordDAO(BaseDAO[SampleRecord]):
    """
    DAO for SampleRecord operations.

    Example:
        dao = RecordDAO(session)
        result = await dao.read_records({"name": "Widget"}, limit=10)
        if not result.failed:
            records = result.value
    """

    def __init__(self, session: AsyncSession):
        super().__init__(SampleRecord, session)

    # ------------------------------------------------------------------
    # Condition compilation
    # ------------------------------------------------------------------

    def _text_expression(self, field: str):
        if field == "id":
            return cast(SampleRecord.id, String)
        if field == "_id":
            return SampleRecord.storage_id
        return SampleRecord.data[field].as_string()

    def _wildcard_clause(self, condition: WildcardCondition):
        pattern = f"%{_escape_like(condition.keyword)}%"
        return or_(
            *[
                self._text_expression(field).ilike(pattern, escape="\\")
                for field in condition.fields
            ]
        )

    def _data_clause(self, key: str, value: Any):
        element = SampleRecord.data[key]
        if value is None:
            return element.as_string().is_(None)
        if isinstance(value, bool):
            return element.as_boolean() == value
        if isinstance(value, int):
            return element.as_integer() == value
        if isinstance(value, float):
            return element.as_float() == value
        if isinstance(value, str):
            return element.as_string() == value
        raise ValidationError(f"Unsupported condition for '{key}'", field=key)

    def _clause(self, key: str, value: Any):
        if key == WILDCARD_KEY:
            if not isinstance(value, WildcardCondition):
                raise ValidationError(f"Invalid wildcard condition under '{key}'", field=key)
            return self._wildcard_clause(value)
        if key == "id":
            return SampleRecord.id == _as_int(key, value)
        if key == "_id":
            return SampleRecord.storage_id == str(value)
        if key == "is_active":
            return SampleRecord.is_active == _as_bool(key, value)
        return self._data_clause(key, value)

    def _where(self, conditions: Mapping[str, Any]) -> list:
        clauses = [SampleRecord.is_deleted.is_(False)]
        clauses.extend(self._clause(key, value) for key, value in conditions.items())
        return clauses

    def _sort_expression(self, field: str):
        column = _SORTABLE_COLUMNS.get(field)
        if column is not None:
            return column
        return SampleRecord.data[field].as_string()

    @staticmethod
    def _project(record: Dict[str, Any], fields: Optional[List[str]]) -> Dict[str, Any]:
        if not fields:
            return record
        projected = {key: record[key] for key in fields if key in record}
        projected["_id"] = record["_id"]
        return projected

    async def _matching(self, conditions: Mapping[str, Any]) -> List[SampleRecord]:
        return await self.fetch_all(select(SampleRecord).where(*self._where(conditions)))

    async def _failure(self, operation: str, exc: Exception) -> Failure:
        if isinstance(exc, ValidationError):
            logger.info(f"RecordDAO.{operation} rejected conditions: {exc.message}")
            return Failure(exc.message)
        logger.error(f"RecordDAO.{operation} failed: {exc}", exc_info=exc)
        await self.session.rollback()
        return Failure(f"Database error during {operation}")

    # ------------------------------------------------------------------
    # RecordController
    # ------------------------------------------------------------------

    async def create_record(self, data: Mapping[str, Any]) -> ControllerResult:
        """
        Insert a record and return it.

        System fields in ``data`` are ignored; the database assigns ``id`` and
        ``_id`` is generated on insert.

        Returns:
            Success with the created record mapping
        """
        try:
            payload = {k: v for k, v in data.items() if k not in SYSTEM_FIELDS}
            record = await self.create(data=payload)
            logger.info(f"Created sample record id={record.id}")
            return Success(record.to_dict())
        except SQLAlchemyError as e:
            return await self._failure("create_record", e)

    async def read_records(
        self,
        conditions: Mapping[str, Any],
        fields_to_return: Optional[List[str]] = None,
        sort: Optional[List[Tuple[str, bool]]] = None,
        skip: int = 0,
        limit: Optional[int] = None,
        count: bool = False,
    ) -> ControllerResult:
        """
        Read records matching every condition.

        Args:
            conditions: Field conditions, optionally with a wildcard entry
            fields_to_return: Keys to keep in each record (``_id`` always kept)
            sort: (field, descending) pairs; defaults to ascending ``id``
            skip: Records to skip
            limit: Maximum records to return (None for no limit)
            count: Return the number of matches instead of the records

        Returns:
            Success with a list of records, or with an int when ``count``
        """
        try:
            where = self._where(conditions)
            if count:
                total = await self.fetch_scalar(
                    select(func.count()).select_from(SampleRecord).where(*where)
                )
                return Success(int(total or 0))

            query = select(SampleRecord).where(*where)
            if sort:
                for field, descending in sort:
                    expression = self._sort_expression(field)
                    query = query.order_by(expression.desc() if descending else expression.asc())
            else:
                query = query.order_by(SampleRecord.id.asc())
            if skip:
                query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)

            records = await self.fetch_all(query)
            return Success([self._project(r.to_dict(), fields_to_return) for r in records])
        except (SQLAlchemyError, ValidationError) as e:
            return await self._failure("read_records", e)

    async def update_records(
        self, conditions: Mapping[str, Any], data: Mapping[str, Any]
    ) -> ControllerResult:
        """
        Merge ``data`` into every matching record.

        Returns:
            Success with ``{"ok", "nModified", "n"}``; records whose data
            already equals the merge result are matched but not modified
        """
        try:
            changes = {k: v for k, v in data.items() if k not in SYSTEM_FIELDS}
            records = await self._matching(conditions)
            modified = 0
            for record in records:
                merged = {**(record.data or {}), **changes}
                if merged != record.data:
                    record.data = merged
                    modified += 1
            await self.session.flush()
            return Success(mutation_ack(matched=len(records), modified=modified))
        except (SQLAlchemyError, ValidationError) as e:
            return await self._failure("update_records", e)

    async def delete_records(self, conditions: Mapping[str, Any]) -> ControllerResult:
        """
        Soft-delete every matching record.

        Returns:
            Success with ``{"ok", "nModified", "n"}``
        """
        try:
            records = await self._matching(conditions)
            for record in records:
                record.is_active = False
                record.is_deleted = True
            await self.session.flush()
            logger.info(f"Soft-deleted {len(records)} sample record(s)")
            return Success(mutation_ack(matched=len(records), modified=len(records)))
        except (SQLAlchemyError, ValidationError) as e:
            return await self._failure("delete_records", e)
