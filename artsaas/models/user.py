# artsaas/models/user.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional

from anyio import to_thread
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pymongo.errors import DuplicateKeyError

from ..core.security import hash_password

Role = Literal["artist", "volunteer", "admin", "guest"]
# admin accounts are provisioned directly in the database
SelfServiceRole = Literal["artist", "volunteer", "guest"]


# ---------- Pydantic ----------
class UserCreate(BaseModel):
    email: EmailStr
    password: str
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    role: SelfServiceRole = "guest"


class UserPublic(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    email: EmailStr
    first_name: str
    last_name: str
    role: Role
    is_profile_complete: bool = False


class EmailTakenError(Exception):
    pass


# ---------- Repo ----------
class UserRepo:
    def __init__(self, db):
        self.col = db["users"]

    async def create(self, data: UserCreate) -> UserPublic:
        doc: Dict[str, Any] = {
            "email": str(data.email).lower(),
            "first_name": data.first_name,
            "last_name": data.last_name,
            "role": data.role,
            "password_hash": hash_password(data.password),
            "is_profile_complete": False,
            "created_at": datetime.now(timezone.utc),
        }

        def _insert() -> str:
            try:
                res = self.col.insert_one(doc)
            except DuplicateKeyError:
                raise EmailTakenError(doc["email"]) from None
            return str(res.inserted_id)

        doc["_id"] = await to_thread.run_sync(_insert)
        return UserPublic.model_validate(doc)

    async def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Full document (password_hash included), for login.
        """
        def _find() -> Optional[Dict[str, Any]]:
            d = self.col.find_one({"email": email.lower()})
            if not d:
                return None
            d["_id"] = str(d["_id"])
            return d

        return await to_thread.run_sync(_find)
