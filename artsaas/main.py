# artsaas/main.py
"""
FastAPI app: CORS, lifespan (startup/shutdown), routers + request logging middleware.
"""
import logging, time

from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv(), override=True)  # before settings are read

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .db.mongo import connect_to_mongo, disconnect_from_mongo
from .core.config import settings
from .telemetry.logging import setup_logging
from .routes import (
    auth, users, assessments, artists, artworks, mentorship,
    donations, payments, dashboard,
)

setup_logging()
http_logger = logging.getLogger("artsaas.http")

@asynccontextmanager
async def lifespan(app: FastAPI):
    connect_to_mongo()
    yield
    disconnect_from_mongo()

app = FastAPI(title="ArtSaaS API", version="0.1.0", lifespan=lifespan)

# ---------------- CORS ----------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------- Request logging ----------------
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        dur = round(time.time() - start, 4)
        http_logger.info("%s %s -> %s in %ss", request.method, request.url.path, response.status_code, dur)
        return response
    except Exception as e:
        dur = round(time.time() - start, 4)
        http_logger.exception("%s %s EXC after %ss: %s", request.method, request.url.path, dur, e)
        raise

# ---------------- Healthcheck ----------------
@app.get("/health", tags=["misc"])
async def health():
    return {"ok": True}

# ---------------- Routers ----------------
app.include_router(auth.router,        prefix="/auth",        tags=["auth"])
app.include_router(users.router,       prefix="/users",       tags=["users"])
app.include_router(assessments.router, prefix="/assessments", tags=["assessments"])
app.include_router(artists.router,     prefix="/artists",     tags=["artists"])
app.include_router(artworks.router,    prefix="/artworks",    tags=["artworks"])
app.include_router(mentorship.router,  prefix="/mentorship",  tags=["mentorship"])
app.include_router(donations.router,   prefix="/donations",   tags=["donations"])
app.include_router(payments.router,    prefix="/payments",    tags=["payments"])
app.include_router(dashboard.router,   prefix="/dashboard",   tags=["dashboard"])
