# artsaas/routes/artworks.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from ..core.deps import current_db, current_user, require_roles
from ..models.artwork import ArtworkCreate, ArtworkRepo, ArtworkUpdate

router = APIRouter()


async def _owned(repo: ArtworkRepo, artwork_id: str, user: dict) -> dict:
    doc = await repo.get(artwork_id)
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="artwork_not_found")
    if doc["artist_id"] != user["sub"] and user.get("role") != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return doc


@router.post("", summary="Add an artwork to my portfolio")
async def create_artwork(payload: ArtworkCreate, db=Depends(current_db), user=Depends(require_roles("artist"))):
    return await ArtworkRepo(db).create(user["sub"], payload)


@router.get("", summary="Artworks of one artist")
async def list_artworks(artist_id: str = Query(..., description="Artist user id"), db=Depends(current_db)):
    return await ArtworkRepo(db).by_artist(artist_id)


@router.get("/featured", summary="Featured published artworks")
async def featured(db=Depends(current_db)):
    return await ArtworkRepo(db).featured()


@router.patch("/{artwork_id}", summary="Update an artwork")
async def update_artwork(artwork_id: str, payload: ArtworkUpdate, db=Depends(current_db), user=Depends(current_user)):
    repo = ArtworkRepo(db)
    await _owned(repo, artwork_id, user)
    return await repo.update(artwork_id, payload)


@router.delete("/{artwork_id}", summary="Delete an artwork")
async def delete_artwork(artwork_id: str, db=Depends(current_db), user=Depends(current_user)):
    repo = ArtworkRepo(db)
    await _owned(repo, artwork_id, user)
    await repo.delete(artwork_id)
    return {"deleted": True}
