"""
Sample record model.

WHAT: Storage for the opaque sample records served by the CRUD API.

WHY: Records carry two identifiers. ``id`` is the application identifier
that routes and filters use; the database assigns it on insert and it never
changes. ``_id`` is the storage key exposed to clients, generated here and
never accepted from callers. Every other field lives in the ``data`` JSON
column.

HOW: Deletes are soft: ``is_active`` drops to False and ``is_deleted`` is
set, so the row stops matching reads but stays in the table.
"""

import uuid
from typing import Any, Dict

from sqlalchemy import Boolean, Column, Integer, JSON, String

from records_api.models.base import Base, TimestampMixin


def generate_storage_id() -> str:
    """Return a new 32-character hex storage identifier."""
    return uuid.uuid4().hex


class SampleRecord(Base, TimestampMixin):
    """
    A single sample record.

    Example:
        record = SampleRecord(data={"name": "Widget"})
        session.add(record)
        await session.flush()
        record.to_dict()
        # {"name": "Widget", "id": 7, "_id": "...", "is_active": True, ...}
    """

    __tablename__ = "sample_records"

    # AUTOINCREMENT keeps SQLite from handing out the id of a removed row again.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    """Application identifier, exposed as ``id``."""

    storage_id = Column("_id", String(32), unique=True, nullable=False, index=True, default=generate_storage_id)
    """Storage identifier, exposed as ``_id``."""

    data = Column(JSON, nullable=False, default=dict)
    """Caller-supplied fields."""

    is_active = Column(Boolean, default=True, nullable=False, index=True)
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<SampleRecord(id={self.id}, _id={self.storage_id!r})>"

    def to_dict(self) -> Dict[str, Any]:
        """
        Flatten the record into the mapping returned to clients.

        Stored system fields win over any same-named key inside ``data``.
        """
        return {
            **(self.data or {}),
            "id": self.id,
            "_id": self.storage_id,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
