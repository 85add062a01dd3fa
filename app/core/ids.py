from beanie import PydanticObjectId
from bson.errors import InvalidId

from app.core.exceptions import BadRequestError


def parse_object_id(value: str | None, label: str = "id") -> PydanticObjectId:
    """Parse a path/body id, raising 400 instead of letting bson errors surface as 500."""
    if not value:
        raise BadRequestError(f"{label} is required")
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError) as e:
        raise BadRequestError(f"Invalid {label}") from e
