# artsaas/routes/dashboard.py
from fastapi import APIRouter, Depends
from ..core.deps import current_db, require_roles
from ..models.artwork import ArtworkRepo
from ..models.assessment import AssessmentRepo
from ..models.donation import DonationRepo
from ..models.mentorship import MentorshipRepo

router = APIRouter()


@router.get("/artist", summary="Artist dashboard stats and recent activity")
async def artist_dashboard(db=Depends(current_db), user=Depends(require_roles("artist"))):
    uid = user["sub"]
    artworks = await ArtworkRepo(db).by_artist(uid)
    donations = DonationRepo(db)
    donation_count, raised = await donations.completed_totals(uid)
    return {
        "stats": {
            "artworks": len(artworks),
            "views": sum(a.get("views", 0) for a in artworks),
            "donations": donation_count,
            # per currency, amounts in different currencies are never summed
            "total_raised": raised,
            "mentorship_requests": await MentorshipRepo(db).count_for_artist(uid),
            "assessments": await AssessmentRepo(db).count_for_user(uid),
        },
        "recent_artworks": artworks[:3],
        "recent_donations": await donations.completed_for_artist(uid, limit=3),
    }
