# artsaas/routes/mentorship.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from ..core.deps import current_db, require_roles
from ..models.mentorship import (
    MentorshipAnswer, MentorshipRepo, MentorshipRequestCreate, RequestStatus,
)

router = APIRouter()


@router.post("/requests", summary="Ask a volunteer for mentorship")
async def create_request(payload: MentorshipRequestCreate, db=Depends(current_db), user=Depends(require_roles("artist"))):
    if payload.volunteer_id == user["sub"]:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot mentor yourself")
    return await MentorshipRepo(db).create(user["sub"], payload)


@router.get("/requests", summary="My mentorship requests")
async def list_requests(
    status_: RequestStatus | None = Query(default=None, alias="status"),
    db=Depends(current_db),
    user=Depends(require_roles("artist", "volunteer")),
):
    return await MentorshipRepo(db).for_user(user["sub"], user["role"], status_)


@router.patch("/requests/{request_id}", summary="Accept or reject a request (volunteer)")
async def answer_request(
    request_id: str, payload: MentorshipAnswer, db=Depends(current_db), user=Depends(require_roles("volunteer"))
):
    repo = MentorshipRepo(db)
    current = await repo.get(request_id)
    if not current:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="request_not_found")
    if current["volunteer_id"] != user["sub"]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    new_status = "accepted" if payload.action == "accept" else "rejected"
    updated = await repo.transition(request_id, new_status, payload.response_message)
    if not updated:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="request_not_pending")
    return updated


@router.post("/requests/{request_id}/cancel", summary="Withdraw a pending request (artist)")
async def cancel_request(request_id: str, db=Depends(current_db), user=Depends(require_roles("artist"))):
    repo = MentorshipRepo(db)
    current = await repo.get(request_id)
    if not current:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="request_not_found")
    if current["artist_id"] != user["sub"]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    updated = await repo.transition(request_id, "cancelled")
    if not updated:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="request_not_pending")
    return updated
