# artsaas/services/auth_service.py
"""
Authentication service: check email/password and issue a JWT.
"""
import logging
from fastapi import HTTPException, status
from ..models.user import UserRepo
from ..core.security import create_jwt, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, user_repo: UserRepo) -> None:
        self.user_repo = user_repo

    async def authenticate(self, email: str, password: str) -> str:
        user = await self.user_repo.get_by_email(email)
        if not user or not verify_password(password, user["password_hash"]):
            logger.info("Failed login for %s", email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials"
            )

        return create_jwt({"sub": user["_id"], "role": user["role"]})
