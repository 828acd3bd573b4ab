"""
Stripe glue for donations.
- PaymentIntent creation in minor units, donor/artist kept in metadata.
- Webhook verification and bookkeeping of succeeded/failed intents.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import stripe

from ..core.config import settings
from ..models.artist import ArtistRepo
from ..models.donation import DonationCreate, DonationRepo
from .donations import SUPPORTED_CURRENCIES, check_amount, to_minor_units

logger = logging.getLogger(__name__)


@dataclass
class PaymentResult:
    """Result of a Stripe operation."""
    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class StripeService:
    def __init__(self, api_key: str | None = None, webhook_secret: str | None = None):
        self.api_key = settings.STRIPE_SECRET_KEY if api_key is None else api_key
        self.webhook_secret = settings.STRIPE_WEBHOOK_SECRET if webhook_secret is None else webhook_secret
        if self.api_key:
            stripe.api_key = self.api_key

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def create_payment_intent(self, donor_id: str, data: DonationCreate) -> PaymentResult:
        """
        Raises DonationAmountError for unsupported currency or amount below minimum.
        """
        if not self.is_configured:
            return PaymentResult(success=False, error="Stripe not configured")
        check_amount(data.amount, data.currency)
        code = SUPPORTED_CURRENCIES[data.currency]["code"]
        amount = to_minor_units(data.amount)

        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=code,
                metadata={
                    "donor_id": donor_id,
                    "artist_id": data.artist_id,
                    "donation_type": data.donation_type,
                    "message": data.message or "",
                    "is_anonymous": str(data.is_anonymous).lower(),
                },
                description=f"Donation to artist {data.artist_id}",
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as e:
            logger.error("PaymentIntent creation failed: %s", e)
            return PaymentResult(success=False, error=str(e))

        return PaymentResult(success=True, data={
            "client_secret": intent.client_secret,
            "payment_intent_id": intent.id,
            "amount": amount,
            "currency": code,
        })

    def verify_webhook(self, payload: bytes, signature: str) -> PaymentResult:
        if not self.webhook_secret:
            return PaymentResult(success=False, error="Webhook secret not configured")
        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning("Webhook verification failed: %s", e)
            return PaymentResult(success=False, error=str(e))
        # verified; handlers index plain dicts, not StripeObjects
        event = json.loads(payload)
        return PaymentResult(success=True, data={"event": event})


def _donation_from_intent(intent) -> tuple[str, DonationCreate]:
    meta = intent["metadata"]
    data = DonationCreate(
        artist_id=meta["artist_id"],
        amount=intent["amount"] / 100,
        currency=intent["currency"].upper(),
        donation_type=meta.get("donation_type") or "one_time",
        message=meta.get("message") or None,
        is_anonymous=meta.get("is_anonymous") == "true",
    )
    return meta["donor_id"], data


async def process_webhook_event(event, db) -> str:
    """
    Records the outcome of a PaymentIntent. Returns what was done.
    Replayed events for an already-recorded intent are ignored.
    """
    kind = event["type"]
    if kind not in ("payment_intent.succeeded", "payment_intent.payment_failed"):
        logger.info("Unhandled Stripe event type %s", kind)
        return "ignored"

    intent = event["data"]["object"]
    repo = DonationRepo(db)
    if await repo.exists_for_intent(intent["id"]):
        logger.info("Stripe intent %s already recorded", intent["id"])
        return "duplicate"

    donor_id, data = _donation_from_intent(intent)
    if kind == "payment_intent.payment_failed":
        await repo.create(donor_id, data, status="failed", payment_method="card",
                          stripe_payment_intent_id=intent["id"])
        logger.info("Payment failure recorded: %s", intent["id"])
        return "failed"

    await repo.create(donor_id, data, status="completed", payment_method="card",
                      stripe_payment_intent_id=intent["id"])
    await ArtistRepo(db).add_donation(data.artist_id, data.amount)
    if data.donation_type == "monthly":
        await repo.create_subscription(donor_id, data.artist_id, data.amount, data.currency, intent["id"])
    logger.info("Payment processed: %s", intent["id"])
    return "completed"
