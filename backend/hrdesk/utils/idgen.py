"""ID Utilities - correlation IDs and MongoDB ObjectId handling"""
import uuid
from datetime import datetime
from typing import Any, Union

from bson import ObjectId
from bson.errors import InvalidId


def generate_correlation_id() -> str:
    """
    Generate a correlation ID for request tracing

    Returns:
        Correlation ID string with timestamp prefix
    """
    timestamp = datetime.utcnow().strftime("%Y%m%d%H%M%S")
    unique_part = uuid.uuid4().hex[:8]
    return f"COR-{timestamp}-{unique_part}"


def to_object_id(value: Union[str, ObjectId]) -> Union[str, ObjectId]:
    """
    Convert a 24-hex string to ObjectId.

    Documents written by the platform reference each other by ObjectId;
    values that are not valid ObjectIds are returned unchanged.
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return value


def stringify_ids(value: Any) -> Any:
    """
    Recursively turn ObjectIds into strings and ``_id`` into ``id``.

    Repositories hand plain JSON-like dicts to the engine.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [stringify_ids(item) for item in value]
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            result["id" if key == "_id" else key] = stringify_ids(item)
        return result
    return value
