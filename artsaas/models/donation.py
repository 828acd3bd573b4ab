# artsaas/models/donation.py
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Literal, Optional, Tuple
from anyio import to_thread
from pydantic import BaseModel, Field
from pymongo import DESCENDING

from ..services.donations import Currency, DonationType, platform_fee
from .common import to_public

DonationStatus = Literal["pending", "completed", "failed", "refunded", "cancelled"]
PaymentMethod = Literal["card", "bank_transfer", "paypal", "other"]

BILLING_PERIOD_DAYS = 30


class DonationCreate(BaseModel):
    artist_id: str
    amount: float = Field(gt=0)
    currency: Currency = "USD"
    donation_type: DonationType = "one_time"
    message: Optional[str] = Field(default=None, max_length=1000)
    is_anonymous: bool = False


class DonationRepo:
    def __init__(self, db):
        self.col = db["donations"]
        self.subscriptions = db["subscriptions"]

    async def create(
        self,
        donor_id: str,
        data: DonationCreate,
        *,
        status: DonationStatus = "pending",
        payment_method: Optional[PaymentMethod] = None,
        stripe_payment_intent_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        # failed payments carry no fee
        fee, net = platform_fee(data.amount) if status != "failed" else (0.0, 0.0)
        doc: Dict[str, Any] = {
            "donor_id": donor_id,
            **data.model_dump(),
            "status": status,
            "payment_method": payment_method,
            "stripe_payment_intent_id": stripe_payment_intent_id,
            "platform_fee": fee,
            "net_amount": net,
            "is_recurring": data.donation_type == "monthly",
            "processed_at": now if status in ("completed", "failed") else None,
            "created_at": now,
        }

        def _insert():
            res = self.col.insert_one(doc)
            return str(res.inserted_id)

        doc["_id"] = await to_thread.run_sync(_insert)
        return doc

    async def exists_for_intent(self, payment_intent_id: str) -> bool:
        def _find():
            return self.col.find_one({"stripe_payment_intent_id": payment_intent_id}) is not None

        return await to_thread.run_sync(_find)

    async def completed_for_artist(self, artist_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        def _fetch():
            cur = (
                self.col.find({"artist_id": artist_id, "status": "completed"})
                .sort("created_at", DESCENDING)
                .limit(limit)
            )
            return [to_public(d) for d in cur]

        return await to_thread.run_sync(_fetch)

    async def completed_totals(self, artist_id: str) -> Tuple[int, Dict[str, float]]:
        """Count of completed donations and the amount raised, keyed by currency."""
        match = {"artist_id": artist_id, "status": "completed"}

        def _aggregate():
            count = self.col.count_documents(match)
            rows = self.col.aggregate([
                {"$match": match},
                {"$group": {"_id": "$currency", "total": {"$sum": "$amount"}}},
            ])
            return count, {r["_id"]: round(r["total"], 2) for r in rows}

        return await to_thread.run_sync(_aggregate)

    async def create_subscription(
        self, donor_id: str, artist_id: str, amount: float, currency: str, payment_intent_id: str
    ) -> str:
        now = datetime.now(timezone.utc)
        doc = {
            "donor_id": donor_id,
            "artist_id": artist_id,
            "amount": amount,
            "currency": currency,
            "status": "active",
            "stripe_payment_intent_id": payment_intent_id,
            "next_billing_date": now + timedelta(days=BILLING_PERIOD_DAYS),
            "created_at": now,
        }

        def _insert():
            res = self.subscriptions.insert_one(doc)
            return str(res.inserted_id)

        return await to_thread.run_sync(_insert)
