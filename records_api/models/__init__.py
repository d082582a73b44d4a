"""
Database models package.

WHY: Centralizing model imports ensures Alembic can discover all models
for migration generation and makes it easier to import models elsewhere.
"""

from records_api.models.base import Base, TimestampMixin
from records_api.models.record import SampleRecord, generate_storage_id

__all__ = [
    "Base",
    "TimestampMixin",
    "SampleRecord",
    "generate_storage_id",
]
