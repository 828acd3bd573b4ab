# artsaas/db/indexes.py
"""
Index creation, run once per connection.
"""
from pymongo import ASCENDING, DESCENDING

def ensure_indexes(db) -> None:
    # users: unique email
    db["users"].create_index([("email", ASCENDING)], unique=True)

    # one artist profile per user
    db["artists"].create_index([("user_id", ASCENDING)], unique=True)
    db["artworks"].create_index([("artist_id", ASCENDING), ("created_at", DESCENDING)])

    # assessment history by user, newest first
    db["assessments"].create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

    db["mentorship_requests"].create_index([("artist_id", ASCENDING)])
    db["mentorship_requests"].create_index([("volunteer_id", ASCENDING)])

    db["donations"].create_index([("artist_id", ASCENDING), ("status", ASCENDING)])
    db["donations"].create_index([("stripe_payment_intent_id", ASCENDING)])
