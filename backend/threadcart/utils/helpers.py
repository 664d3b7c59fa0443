from datetime import datetime
from typing import Any, List, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId


def object_id_to_str(obj_id) -> str:
    """Convert ObjectId to string."""
    if isinstance(obj_id, ObjectId):
        return str(obj_id)
    return obj_id


def parse_object_id(value: str) -> Optional[ObjectId]:
    """Parse a hex id string, returning None when it is not a valid ObjectId."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def format_document(document: Optional[dict]) -> Optional[dict]:
    """Stringify the MongoDB ``_id`` so the document validates into a model."""
    if document and "_id" in document:
        document["_id"] = object_id_to_str(document["_id"])
    return document


def get_current_timestamp() -> datetime:
    """Get current UTC timestamp."""
    return datetime.utcnow()


def normalize_color(color: Union[str, List[Any], None]) -> str:
    """
    Reduce a color to a single string.

    Some clients send multi-select color arrays; the first entry wins and an
    empty list means no color.
    """
    if color is None:
        return ""
    if isinstance(color, (list, tuple)):
        return str(color[0]).strip() if color else ""
    return str(color).strip()
