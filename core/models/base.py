"""Base document model and serialization helpers.

Provides:
- Document: Pydantic base class for all entities stored in a collection
- ObjectIdStr: Annotated type that accepts ObjectIds or their hex strings
- Int64: integer bounded to what BSON can store
- serialize_document(): converts a raw driver document into JSON-safe data

Every entity declares its collection name in ``__collection__``. Field
values are coerced on construction and unknown fields are dropped, so only
declared fields ever reach the store.
"""

from datetime import date, datetime
from typing import Annotated, Any, ClassVar

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


def _to_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ValueError(f"Cast to ObjectId failed for value {value!r}")


ObjectIdStr = Annotated[
    ObjectId,
    BeforeValidator(_to_object_id),
    PlainSerializer(str, return_type=str, when_used="json"),
]


class Document(BaseModel):
    """Declarative base for all stored entities."""

    model_config = ConfigDict(
        extra="ignore",
        coerce_numbers_to_str=True,
        arbitrary_types_allowed=True,
    )

    __collection__: ClassVar[str]

    def to_document(self) -> dict[str, Any]:
        """Return the insertable form, omitting fields that were not given."""
        return self.model_dump(exclude_none=True)


def serialize_document(doc: dict[str, Any] | None) -> dict[str, Any] | None:
    """Render ObjectIds as hex strings and datetimes as ISO-8601."""
    if doc is None:
        return None
    return {key: _serialize_value(value) for key, value in doc.items()}


def _serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return serialize_document(value)
    if isinstance(value, list):
        return [_serialize_value(v) for v in value]
    return value
