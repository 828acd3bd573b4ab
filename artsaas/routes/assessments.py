# artsaas/routes/assessments.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from ..core.deps import current_db, current_user, require_roles
from ..models.assessment import AssessmentRepo, AssessmentSubmit, ReviewIn
from ..services.emergency_line import get_us_crisis_resources
from ..services.questionnaires import (
    ANSWER_OPTIONS, SEVERITY_BANDS, AssessmentKind, instruments_for, questions_for,
)
from ..services.scoring_phq_gad import (
    IncompleteAssessmentError, InvalidResponseValueError, submit_assessment,
)

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/questions", summary="Questions, answer options and severity bands")
async def questions(kind: AssessmentKind = Query(default="combined")):
    return {
        "assessment_type": kind,
        "questions": [q.model_dump() for q in questions_for(kind)],
        "options": [o.model_dump() for o in ANSWER_OPTIONS],
        "bands": {i: [b.model_dump() for b in SEVERITY_BANDS[i]] for i in instruments_for(kind)},
    }

@router.post("", summary="Submit and score a PHQ-9 / GAD-7 assessment")
async def submit(payload: AssessmentSubmit, db=Depends(current_db), user=Depends(current_user)):
    responses = payload.to_responses()
    try:
        result = submit_assessment(payload.assessment_type, responses)
    except (IncompleteAssessmentError, InvalidResponseValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    repo = AssessmentRepo(db)
    record = await repo.save(user["sub"], payload.assessment_type, responses, result)
    logger.info("Assessment %s saved: risk=%s", record["_id"], result.overall_risk)
    out = {"assessment_id": record["_id"], "result": result.model_dump()}
    if result.crisis_resources_provided:
        out["crisis_resources"] = get_us_crisis_resources().model_dump()
    return out

@router.get("/history", summary="My assessments (newest first)")
async def history(limit: int = Query(default=50, ge=1, le=50), db=Depends(current_db), user=Depends(current_user)):
    repo = AssessmentRepo(db)
    return await repo.history(user_id=user["sub"], limit=limit)

@router.get("/follow-up", summary="Assessments awaiting admin follow-up")
async def follow_up(db=Depends(current_db), user=Depends(require_roles("admin"))):
    repo = AssessmentRepo(db)
    return await repo.pending_follow_up()

@router.patch("/{assessment_id}/review", summary="Mark an assessment as reviewed")
async def review(assessment_id: str, payload: ReviewIn, db=Depends(current_db), user=Depends(require_roles("admin"))):
    repo = AssessmentRepo(db)
    doc = await repo.mark_reviewed(assessment_id, payload.admin_notes)
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="assessment_not_found")
    return doc
