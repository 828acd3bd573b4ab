# artsaas/models/artist.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional
from anyio import to_thread
from pydantic import BaseModel, Field
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError
import re

from .common import oid, to_public

ExperienceLevel = Literal["beginner", "intermediate", "advanced", "professional"]
MentorshipType = Literal["in_person", "virtual", "both"]


# ---------- Pydantic ----------
class ArtistCreate(BaseModel):
    artistic_mediums: List[str] = Field(min_length=1)
    experience_level: ExperienceLevel
    portfolio_website: Optional[str] = None
    instagram_handle: Optional[str] = None
    artistic_statement: Optional[str] = None
    skills: Optional[str] = None
    availability_for_mentorship: bool = False
    preferred_mentorship_type: Optional[MentorshipType] = None
    languages_spoken: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    special_needs: Optional[str] = None


class ArtistUpdate(BaseModel):
    artistic_mediums: Optional[List[str]] = None
    experience_level: Optional[ExperienceLevel] = None
    portfolio_website: Optional[str] = None
    instagram_handle: Optional[str] = None
    artistic_statement: Optional[str] = None
    skills: Optional[str] = None
    availability_for_mentorship: Optional[bool] = None
    preferred_mentorship_type: Optional[MentorshipType] = None
    languages_spoken: Optional[str] = None


class ProfileExistsError(Exception):
    pass


# ---------- Repository ----------
class ArtistRepo:
    def __init__(self, db):
        self.col = db["artists"]

    async def create(self, user_id: str, data: ArtistCreate) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        doc: Dict[str, Any] = {
            **data.model_dump(),
            "user_id": user_id,
            "portfolio_views": 0,
            "total_donations": 0.0,
            "created_at": now,
            "updated_at": now,
        }

        def _insert():
            try:
                res = self.col.insert_one(doc)
            except DuplicateKeyError:
                raise ProfileExistsError(user_id) from None
            return str(res.inserted_id)

        doc["_id"] = await to_thread.run_sync(_insert)
        return doc

    async def get(self, artist_id: str) -> Optional[Dict[str, Any]]:
        _id = oid(artist_id)
        if _id is None:
            return None
        doc = await to_thread.run_sync(lambda: self.col.find_one({"_id": _id}))
        return to_public(doc) if doc else None

    async def get_by_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        doc = await to_thread.run_sync(lambda: self.col.find_one({"user_id": user_id}))
        return to_public(doc) if doc else None

    async def search(
        self,
        medium: Optional[str] = None,
        experience_level: Optional[ExperienceLevel] = None,
        available: Optional[bool] = None,
        limit: int = 50,
    ) -> List[Dict[str, Any]]:
        """
        Filters combine with AND; medium is a case-insensitive substring match.
        Most viewed first.
        """
        query: Dict[str, Any] = {}
        if medium:
            query["artistic_mediums"] = {"$regex": re.escape(medium), "$options": "i"}
        if experience_level:
            query["experience_level"] = experience_level
        if available is not None:
            query["availability_for_mentorship"] = available

        def _fetch():
            cur = self.col.find(query).sort("portfolio_views", DESCENDING).limit(limit)
            return [to_public(d) for d in cur]

        return await to_thread.run_sync(_fetch)

    async def update(self, artist_id: str, data: ArtistUpdate) -> Optional[Dict[str, Any]]:
        _id = oid(artist_id)
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

    async def add_view(self, artist_id: str) -> None:
        _id = oid(artist_id)
        if _id is None:
            return
        await to_thread.run_sync(lambda: self.col.update_one({"_id": _id}, {"$inc": {"portfolio_views": 1}}))

    async def add_donation(self, user_id: str, amount: float) -> None:
        await to_thread.run_sync(
            lambda: self.col.update_one({"user_id": user_id}, {"$inc": {"total_donations": amount}})
        )
