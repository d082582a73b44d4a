"""
Contact form schemas.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ContactData(BaseModel):
    """Fields submitted through the public contact form."""

    email: EmailStr = Field(..., description="Submitter address; receives the acknowledgement")

    model_config = ConfigDict(extra="allow")

    @property
    def fields(self) -> Dict[str, Any]:
        """Every submitted field, extras included."""
        return self.model_dump()


class ContactSubmission(BaseModel):
    """Body of ``POST /sample``."""

    data: ContactData

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "data": {
                    "name": "Ada Lovelace",
                    "email": "ada@example.com",
                    "message": "Please get in touch.",
                }
            }
        }
    )
