# artsaas/routes/artists.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from ..core.deps import current_db, current_user, require_roles
from ..models.artist import (
    ArtistCreate, ArtistRepo, ArtistUpdate, ExperienceLevel, ProfileExistsError,
)

router = APIRouter()

@router.post("", summary="Create my artist profile")
async def create_artist(payload: ArtistCreate, db=Depends(current_db), user=Depends(require_roles("artist"))):
    repo = ArtistRepo(db)
    try:
        return await repo.create(user["sub"], payload)
    except ProfileExistsError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="artist_profile_exists")

@router.get("", summary="Browse artists")
async def list_artists(
    medium: str | None = Query(default=None),
    experience_level: ExperienceLevel | None = Query(default=None),
    available: bool | None = Query(default=None, description="Open to mentorship"),
    db=Depends(current_db),
):
    repo = ArtistRepo(db)
    return await repo.search(medium, experience_level, available)

@router.get("/me", summary="My artist profile")
async def my_profile(db=Depends(current_db), user=Depends(current_user)):
    doc = await ArtistRepo(db).get_by_user(user["sub"])
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="artist_not_found")
    return doc

@router.get("/{artist_id}", summary="Artist profile (counts a portfolio view)")
async def get_artist(artist_id: str, db=Depends(current_db)):
    repo = ArtistRepo(db)
    doc = await repo.get(artist_id)
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="artist_not_found")
    await repo.add_view(artist_id)
    return doc

@router.patch("/{artist_id}", summary="Update an artist profile")
async def update_artist(artist_id: str, payload: ArtistUpdate, db=Depends(current_db), user=Depends(current_user)):
    repo = ArtistRepo(db)
    current = await repo.get(artist_id)
    if not current:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="artist_not_found")
    # owner or admin
    if current["user_id"] != user["sub"] and user.get("role") != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return await repo.update(artist_id, payload)
