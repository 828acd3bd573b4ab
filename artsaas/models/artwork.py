# artsaas/models/artwork.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional
from anyio import to_thread
from pydantic import BaseModel, Field
from pymongo import DESCENDING, ReturnDocument

from .common import oid, to_public

ArtworkStatus = Literal["draft", "published", "sold", "archived"]


class ArtworkCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    medium: str
    dimensions: Optional[str] = None
    year_created: Optional[int] = None
    price: Optional[float] = Field(default=None, ge=0)
    is_for_sale: bool = False
    image: str
    additional_images: List[str] = []
    tags: Optional[str] = None
    is_featured: bool = False
    status: ArtworkStatus = "draft"


class ArtworkUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    medium: Optional[str] = None
    dimensions: Optional[str] = None
    year_created: Optional[int] = None
    price: Optional[float] = Field(default=None, ge=0)
    is_for_sale: Optional[bool] = None
    image: Optional[str] = None
    additional_images: Optional[List[str]] = None
    tags: Optional[str] = None
    is_featured: Optional[bool] = None
    status: Optional[ArtworkStatus] = None


class ArtworkRepo:
    def __init__(self, db):
        self.col = db["artworks"]

    async def create(self, artist_id: str, data: ArtworkCreate) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        doc: Dict[str, Any] = {
            **data.model_dump(),
            "artist_id": artist_id,
            "views": 0,
            "likes": 0,
            "created_at": now,
            "updated_at": now,
        }

        def _insert():
            res = self.col.insert_one(doc)
            return str(res.inserted_id)

        doc["_id"] = await to_thread.run_sync(_insert)
        return doc

    async def get(self, artwork_id: str) -> Optional[Dict[str, Any]]:
        _id = oid(artwork_id)
        if _id is None:
            return None
        doc = await to_thread.run_sync(lambda: self.col.find_one({"_id": _id}))
        return to_public(doc) if doc else None

    async def by_artist(self, artist_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        """Featured first, then most viewed."""
        def _fetch():
            cur = (
                self.col.find({"artist_id": artist_id})
                .sort([("is_featured", DESCENDING), ("views", DESCENDING)])
                .limit(limit)
            )
            return [to_public(d) for d in cur]

        return await to_thread.run_sync(_fetch)

    async def featured(self, limit: int = 20) -> List[Dict[str, Any]]:
        def _fetch():
            cur = (
                self.col.find({"is_featured": True, "status": "published"})
                .sort("views", DESCENDING)
                .limit(limit)
            )
            return [to_public(d) for d in cur]

        return await to_thread.run_sync(_fetch)

    async def update(self, artwork_id: str, data: ArtworkUpdate) -> Optional[Dict[str, Any]]:
        _id = oid(artwork_id)
        if _id is None:
            return None
        changes = data.model_dump(exclude_unset=True)
        changes["updated_at"] = datetime.now(timezone.utc)

        def _update():
            return self.col.find_one_and_update(
                {"_id": _id}, {"$set": changes}, return_document=ReturnDocument.AFTER
            )

        doc = await to_thread.run_sync(_update)
        return to_public(doc) if doc else None

    async def delete(self, artwork_id: str) -> bool:
        _id = oid(artwork_id)
        if _id is None:
            return False
        res = await to_thread.run_sync(lambda: self.col.delete_one({"_id": _id}))
        return res.deleted_count == 1
