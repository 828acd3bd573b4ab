# artsaas/models/common.py
"""
Helpers shared by the repositories: ObjectId parsing and public docs.
"""
from typing import Any, Dict, Optional
from bson import ObjectId
from bson.errors import InvalidId


def oid(value: str) -> Optional[ObjectId]:
    """ObjectId from a string, or None when malformed."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def to_public(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Mongo doc -> serialisable dict, with "_id" as string."""
    out = dict(doc)
    if "_id" in out and not isinstance(out["_id"], str):
        out["_id"] = str(out["_id"])
    return out
