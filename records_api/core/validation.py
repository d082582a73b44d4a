"""
Payload validation helper shared by services.
"""

from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from records_api.core.exceptions import ValidationError


SchemaType = TypeVar("SchemaType", bound=BaseModel)


def validate_payload(schema: Type[SchemaType], data: Mapping[str, Any]) -> SchemaType:
    """
    Validate ``data`` against ``schema``.

    Returns:
        The validated model instance

    Raises:
        ValidationError: With every schema violation joined into one message
    """
    try:
        return schema.model_validate(dict(data))
    except PydanticValidationError as e:
        problems = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            problems.append(f"{location}: {error['msg']}" if location else error["msg"])
        raise ValidationError("; ".join(problems), schema=schema.__name__)
