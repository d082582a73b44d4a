"""Database package"""

from records_api.db.session import AsyncSessionLocal, engine, get_db
from records_api.models.base import Base

__all__ = ["Base", "AsyncSessionLocal", "engine", "get_db"]
