# artsaas/db/mongo.py
import logging
from pymongo import MongoClient
from ..core.config import settings
from .indexes import ensure_indexes

logger = logging.getLogger(__name__)

_client = None
_db = None

def connect_to_mongo():
    """
    Connects to Mongo and creates indexes. Reads MONGO_URI and MONGO_DB from settings.
    Called on startup (lifespan); SYNCHRONOUS.
    """
    global _client, _db
    if _client is not None:
        return _db

    _client = MongoClient(settings.MONGO_URI, uuidRepresentation="standard")
    _db = _client[settings.MONGO_DB]
    ensure_indexes(_db)
    logger.info("Connected to MongoDB database %s", settings.MONGO_DB)
    return _db


def use_database(client, dbname: str):
    """
    Installs an already-built client (e.g. an in-memory one in tests).
    """
    global _client, _db
    _client = client
    _db = client[dbname]
    ensure_indexes(_db)
    return _db


def disconnect_from_mongo():
    """
    Closes the connection. Drops the database if it is named artsaas_test_*.
    """
    global _client, _db
    if _client is not None:
        dbname = _db.name if _db is not None else ""
        if dbname.startswith("artsaas_test_"):
            _client.drop_database(dbname)
        _client.close()
    _client = None
    _db = None


def get_db():
    if _db is None:
        raise RuntimeError("MongoDB not initialised. Call connect_to_mongo() on startup.")
    return _db
