# artsaas/models/mentorship.py
"""
Mentorship requests between artists and volunteer mentors.
Lifecycle: pending -> accepted | rejected (volunteer) | cancelled (artist).
"""
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Literal, Optional
from anyio import to_thread
from pydantic import BaseModel, Field
from pymongo import DESCENDING, ReturnDocument

from .artist import MentorshipType
from .common import oid, to_public

RequestStatus = Literal["pending", "accepted", "rejected", "cancelled", "completed"]
Frequency = Literal["weekly", "bi_weekly", "monthly", "as_needed"]

REQUEST_TTL_DAYS = 30


class MentorshipRequestCreate(BaseModel):
    volunteer_id: str
    request_message: str = Field(min_length=1, max_length=2000)
    preferred_mentorship_type: MentorshipType = "both"
    preferred_frequency: Optional[Frequency] = None
    goals: Optional[str] = None
    special_requirements: Optional[str] = None


class MentorshipAnswer(BaseModel):
    action: Literal["accept", "reject"]
    response_message: Optional[str] = Field(default=None, max_length=2000)


class MentorshipRepo:
    def __init__(self, db):
        self.col = db["mentorship_requests"]

    async def create(self, artist_id: str, data: MentorshipRequestCreate) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        doc: Dict[str, Any] = {
            **data.model_dump(),
            "artist_id": artist_id,
            "status": "pending",
            "response_message": None,
            "requested_at": now,
            "responded_at": None,
            "expires_at": now + timedelta(days=REQUEST_TTL_DAYS),
            "created_at": now,
        }

        def _insert():
            res = self.col.insert_one(doc)
            return str(res.inserted_id)

        doc["_id"] = await to_thread.run_sync(_insert)
        return doc

    async def get(self, request_id: str) -> Optional[Dict[str, Any]]:
        _id = oid(request_id)
        if _id is None:
            return None
        doc = await to_thread.run_sync(lambda: self.col.find_one({"_id": _id}))
        return to_public(doc) if doc else None

    async def for_user(self, user_id: str, role: str, status: Optional[RequestStatus] = None) -> List[Dict[str, Any]]:
        """Artists see what they sent; volunteers see what was addressed to them."""
        key = "artist_id" if role == "artist" else "volunteer_id"
        query: Dict[str, Any] = {key: user_id}
        if status:
            query["status"] = status

        def _fetch():
            cur = self.col.find(query).sort("created_at", DESCENDING).limit(50)
            return [to_public(d) for d in cur]

        return await to_thread.run_sync(_fetch)

    async def count_for_artist(self, artist_id: str) -> int:
        return await to_thread.run_sync(lambda: self.col.count_documents({"artist_id": artist_id}))

    async def transition(
        self, request_id: str, new_status: RequestStatus, response_message: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Moves a *pending* request to new_status. None if it is no longer pending.
        """
        _id = oid(request_id)
        if _id is None:
            return None
        changes: Dict[str, Any] = {"status": new_status, "responded_at": datetime.now(timezone.utc)}
        if response_message is not None:
            changes["response_message"] = response_message

        def _update():
            return self.col.find_one_and_update(
                {"_id": _id, "status": "pending"},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )

        doc = await to_thread.run_sync(_update)
        return to_public(doc) if doc else None
