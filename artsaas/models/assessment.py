# artsaas/models/assessment.py
"""
PHQ-9 / GAD-7 submission schemas and repo.
Scoring lives in services/scoring_phq_gad.py.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, StrictInt
from anyio import to_thread
from pymongo import DESCENDING, ReturnDocument

from ..services.questionnaires import AssessmentKind
from ..services.scoring_phq_gad import AssessmentResult, Response
from .common import oid, to_public


class ResponseIn(BaseModel):
    question_id: str
    value: StrictInt  # 0..3, range checked by the scorer


class AssessmentSubmit(BaseModel):
    assessment_type: AssessmentKind = "combined"
    responses: List[ResponseIn]

    def to_responses(self) -> List[Response]:
        return [Response(r.question_id, r.value) for r in self.responses]


class ReviewIn(BaseModel):
    admin_notes: Optional[str] = Field(default=None, max_length=4000)


class AssessmentRepo:
    def __init__(self, db) -> None:
        self.col = db["assessments"]

    async def save(
        self,
        user_id: str,
        kind: AssessmentKind,
        responses: List[Response],
        result: AssessmentResult,
    ) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        doc = {
            "user_id": user_id,
            "assessment_type": kind,
            "assessment_date": now,
            "responses": [{"question_id": r.question_id, "value": r.value} for r in responses],
            **result.model_dump(),
            "admin_reviewed": False,
            "admin_notes": None,
            "is_complete": True,
            "created_at": now,
        }

        def _insert():
            res = self.col.insert_one(doc)
            return str(res.inserted_id)

        doc["_id"] = await to_thread.run_sync(_insert)
        return doc

    async def history(self, user_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        def _fetch():
            cur = self.col.find({"user_id": user_id}).sort("created_at", DESCENDING).limit(limit)
            return [to_public(d) for d in cur]

        return await to_thread.run_sync(_fetch)

    async def count_for_user(self, user_id: str) -> int:
        return await to_thread.run_sync(lambda: self.col.count_documents({"user_id": user_id}))

    async def pending_follow_up(self, limit: int = 50) -> List[Dict[str, Any]]:
        """Records flagged for follow-up that no admin has reviewed yet."""
        def _fetch():
            cur = (
                self.col.find({"follow_up_needed": True, "admin_reviewed": False})
                .sort("total_score", DESCENDING)
                .limit(limit)
            )
            return [to_public(d) for d in cur]

        return await to_thread.run_sync(_fetch)

    async def mark_reviewed(self, assessment_id: str, notes: Optional[str]) -> Optional[Dict[str, Any]]:
        _id = oid(assessment_id)
        if _id is None:
            return None

        def _update():
            return self.col.find_one_and_update(
                {"_id": _id},
                {"$set": {
                    "admin_reviewed": True,
                    "admin_notes": notes,
                    "reviewed_at": datetime.now(timezone.utc),
                }},
                return_document=ReturnDocument.AFTER,
            )

        doc = await to_thread.run_sync(_update)
        return to_public(doc) if doc else None
