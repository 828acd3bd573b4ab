"""
Central app configuration (single source of truth).
Reads environment variables and exposes a typed Settings object.
"""
import os
from pydantic import BaseModel, Field

class Settings(BaseModel):
    MONGO_URI: str = Field(default_factory=lambda: os.getenv("MONGO_URI", "mongodb://localhost:27017"))
    MONGO_DB: str  = Field(default_factory=lambda: os.getenv("MONGO_DB", "artsaas"))
    JWT_SECRET: str = Field(default_factory=lambda: os.getenv("JWT_SECRET", "changeme"))
    JWT_EXPIRES_MIN: int = Field(default_factory=lambda: int(os.getenv("JWT_EXPIRES_MIN", "60")))
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])
    STRIPE_SECRET_KEY: str = Field(default_factory=lambda: os.getenv("STRIPE_SECRET_KEY", ""))
    STRIPE_WEBHOOK_SECRET: str = Field(default_factory=lambda: os.getenv("STRIPE_WEBHOOK_SECRET", ""))
    PLATFORM_FEE_RATE: float = Field(default_factory=lambda: float(os.getenv("PLATFORM_FEE_RATE", "0.05")))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

settings = Settings()
