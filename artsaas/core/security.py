"""
Security utilities: password hashing, password strength and JWT.
- bcrypt via passlib for hashes.
- Short-lived HS256 JWT carrying the user id (sub) and role.
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Literal
from jose import jwt
from passlib.context import CryptContext
from ..core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
ALGO = "HS256"

PasswordStrength = Literal["weak", "fair", "good", "strong"]

# (requirement key, message, check)
PASSWORD_RULES = [
    ("min_length", "At least 8 characters", lambda p: len(p) >= 8),
    ("has_uppercase", "One uppercase letter", lambda p: re.search(r"[A-Z]", p) is not None),
    ("has_lowercase", "One lowercase letter", lambda p: re.search(r"[a-z]", p) is not None),
    ("has_number", "One number", lambda p: re.search(r"[0-9]", p) is not None),
    ("has_special_char", "One special character",
     lambda p: re.search(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]", p) is not None),
]

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)

def validate_password(password: str) -> dict[str, Any]:
    """
    Returns {"is_valid", "requirements": {key: bool}, "messages": [unmet...]}.
    """
    requirements = {key: check(password) for key, _, check in PASSWORD_RULES}
    messages = [msg for key, msg, _ in PASSWORD_RULES if not requirements[key]]
    return {"is_valid": all(requirements.values()), "requirements": requirements, "messages": messages}

def password_strength(password: str) -> PasswordStrength:
    passed = sum(validate_password(password)["requirements"].values())
    if passed <= 2: return "weak"
    if passed == 3: return "fair"
    if passed == 4: return "good"
    return "strong"

def create_jwt(subject: dict[str, Any], expires_minutes: int | None = None) -> str:
    exp_min = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRES_MIN
    to_encode = {
        "sub": subject.get("sub"),
        "role": subject.get("role"),
        "exp": datetime.now(tz=timezone.utc) + timedelta(minutes=exp_min),
        "iat": datetime.now(tz=timezone.utc),
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=ALGO)

def decode_jwt(token: str) -> dict[str, Any]:
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGO])
