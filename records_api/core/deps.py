"""
FastAPI dependencies that build services for route handlers.

WHY: Routes receive ready-made services through Depends, so tests can swap
a service (or its database session) with dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.dao.record import RecordDAO
from records_api.db.session import get_db
from records_api.services.contact_mail_service import ContactMailService
from records_api.services.record_service import RecordService


RECORD_UPDATE_EVENT = "sample_records_updated"


async def get_record_service(db: AsyncSession = Depends(get_db)) -> RecordService:
    """
    Build a RecordService bound to the request's database session.

    Returns:
        RecordService backed by a RecordDAO
    """
    return RecordService(RecordDAO(db), update_event=RECORD_UPDATE_EVENT)


def get_contact_mail_service() -> ContactMailService:
    """Build the contact mail service with the shared email and template services."""
    return ContactMailService()
