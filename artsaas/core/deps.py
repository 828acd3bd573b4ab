"""
Common FastAPI dependencies:
- current_db
- current_user (via Authorization: Bearer <token>)
- require_roles(...) for role-gated endpoints
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pymongo.database import Database
from ..db.mongo import get_db
from ..core.security import decode_jwt

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def current_db() -> Database:
    return get_db()

async def current_user(token: str = Depends(oauth2_scheme)) -> dict:
    try:
        payload = decode_jwt(token)
        return {"sub": payload["sub"], "role": payload.get("role")}
    except (JWTError, KeyError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

def require_roles(*roles: str):
    async def _dep(user: dict = Depends(current_user)) -> dict:
        if user.get("role") not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
        return user
    return _dep
