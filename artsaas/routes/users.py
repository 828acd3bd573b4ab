from fastapi import APIRouter, Depends
from ..core.deps import current_user

router = APIRouter()

@router.get("/me", summary="Authenticated user")
async def me(user=Depends(current_user)):
    """
    Returns the token subject (user id) and role.
    """
    return user
