# artsaas/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr
from ..core.deps import current_db
from ..core.security import password_strength, validate_password
from ..models.user import EmailTakenError, UserCreate, UserRepo, UserPublic
from ..services.auth_service import AuthService

router = APIRouter()


class LoginIn(BaseModel):
    email: EmailStr
    password: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class PasswordCheckIn(BaseModel):
    password: str


@router.post("/register", response_model=UserPublic, summary="Register a user")
async def register(payload: UserCreate, db=Depends(current_db)):
    """
    Creates an artist, volunteer or guest (donor) account.
    """
    check = validate_password(payload.password)
    if not check["is_valid"]:
        raise HTTPException(
            status_code=422,
            detail={"message": "Password too weak", "missing": check["messages"]},
        )
    repo = UserRepo(db)
    try:
        return await repo.create(payload)
    except EmailTakenError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")


@router.post("/login", response_model=TokenOut, summary="Log in and get a JWT")
async def login(payload: LoginIn, db=Depends(current_db)):
    repo = UserRepo(db)
    svc = AuthService(repo)
    token = await svc.authenticate(payload.email, payload.password)
    return TokenOut(access_token=token)


@router.post("/password-strength", summary="Rate a candidate password")
async def check_password(payload: PasswordCheckIn):
    check = validate_password(payload.password)
    return {**check, "strength": password_strength(payload.password)}
