# artsaas/tests/test_donations.py
"""
Donations: fee arithmetic, pledges and the Stripe glue (outbound Stripe calls are patched, webhooks are signed for real).
"""
import hashlib
import hmac
import json
import time
from unittest.mock import MagicMock, patch

import pytest
import pytest_asyncio
import stripe

from artsaas.main import app
from artsaas.routes.payments import get_stripe
from artsaas.services.donations import DonationAmountError, check_amount, platform_fee, to_minor_units
from artsaas.services.stripe_service import StripeService


# ---------- arithmetic ----------
@pytest.mark.parametrize("amount,fee,net", [(100, 5.0, 95.0), (25, 1.25, 23.75), (10.1, 0.51, 9.59), (1, 0.05, 0.95)])
def test_platform_fee(amount, fee, net):
    assert platform_fee(amount) == (fee, net)


def test_minor_units():
    assert to_minor_units(25) == 2500
    assert to_minor_units(10.1) == 1010


def test_amount_checks():
    check_amount(1, "eur")
    with pytest.raises(DonationAmountError, match="Minimum"):
        check_amount(0.5, "USD")
    with pytest.raises(DonationAmountError, match="Unsupported"):
        check_amount(10, "JPY")


# ---------- HTTP ----------
@pytest_asyncio.fixture
async def stripe_enabled():
    svc = StripeService(api_key="sk_test_123", webhook_secret="whsec_123")
    app.dependency_overrides[get_stripe] = lambda: svc
    yield svc
    app.dependency_overrides.pop(get_stripe, None)


def _intent_event(kind, *, intent_id="pi_1", amount=5000, donation_type="one_time", donor="donor-1", artist="artist-1"):
    return {
        "id": f"evt_{intent_id}",
        "object": "event",
        "type": kind,
        "data": {"object": {
            "id": intent_id,
            "object": "payment_intent",
            "amount": amount,
            "currency": "usd",
            "metadata": {
                "donor_id": donor,
                "artist_id": artist,
                "donation_type": donation_type,
                "message": "keep going",
                "is_anonymous": "false",
            },
        }},
    }


def _signed(event, secret="whsec_123"):
    """Body and headers the way Stripe sends them: t=<ts>,v1=HMAC-SHA256(secret, "<ts>.<body>")."""
    body = json.dumps(event)
    ts = int(time.time())
    sig = hmac.new(secret.encode(), f"{ts}.{body}".encode(), hashlib.sha256).hexdigest()
    return body, {"Stripe-Signature": f"t={ts},v1={sig}", "Content-Type": "application/json"}


@pytest.mark.asyncio
async def test_pledge_and_quote(guest_auth, async_client):
    r = await async_client.post("/donations", headers=guest_auth["headers"], json={
        "artist_id": "artist-1", "amount": 25, "currency": "USD",
    })
    assert r.status_code == 200, r.text
    d = r.json()
    assert (d["status"], d["platform_fee"], d["net_amount"]) == ("pending", 1.25, 23.75)
    assert d["donor_id"] == guest_auth["id"]

    # pending pledges are not listed for the artist
    r2 = await async_client.get("/donations/artist/artist-1")
    assert r2.json() == []

    r3 = await async_client.get("/donations/quote?amount=50&currency=gbp")
    assert r3.json() == {"amount": 50.0, "currency": "GBP", "platform_fee": 2.5, "net_amount": 47.5}

    r4 = await async_client.post("/donations", headers=guest_auth["headers"], json={
        "artist_id": "artist-1", "amount": 0.5,
    })
    assert r4.status_code == 422


@pytest.mark.asyncio
async def test_intent_needs_stripe_configured(guest_auth, async_client):
    app.dependency_overrides[get_stripe] = lambda: StripeService(api_key="", webhook_secret="")
    try:
        r = await async_client.post("/payments/intent", headers=guest_auth["headers"], json={
            "artist_id": "artist-1", "amount": 25,
        })
    finally:
        app.dependency_overrides.pop(get_stripe, None)
    assert r.status_code == 503


@pytest.mark.asyncio
async def test_create_intent(guest_auth, async_client, stripe_enabled):
    with patch("stripe.PaymentIntent.create") as mock_create:
        mock_create.return_value = MagicMock(id="pi_test123", client_secret="secret_test")
        r = await async_client.post("/payments/intent", headers=guest_auth["headers"], json={
            "artist_id": "artist-1", "amount": 25, "currency": "EUR", "donation_type": "monthly",
        })
    assert r.status_code == 200, r.text
    assert r.json() == {
        "client_secret": "secret_test", "payment_intent_id": "pi_test123", "amount": 2500, "currency": "eur",
    }
    kwargs = mock_create.call_args.kwargs
    assert kwargs["amount"] == 2500
    assert kwargs["metadata"]["donor_id"] == guest_auth["id"]
    assert kwargs["metadata"]["donation_type"] == "monthly"


@pytest.mark.asyncio
async def test_create_intent_stripe_error(guest_auth, async_client, stripe_enabled):
    with patch("stripe.PaymentIntent.create", side_effect=stripe.StripeError("card network down")):
        r = await async_client.post("/payments/intent", headers=guest_auth["headers"], json={
            "artist_id": "artist-1", "amount": 25,
        })
    assert r.status_code == 502


@pytest.mark.asyncio
async def test_webhook_bad_signature(async_client, stripe_enabled):
    body, headers = _signed(_intent_event("payment_intent.succeeded"), secret="whsec_other")
    r = await async_client.post("/payments/webhook", content=body, headers=headers)
    assert r.status_code == 400

    r2 = await async_client.post("/payments/webhook", content=body, headers={"Stripe-Signature": "t=1,v1=x"})
    assert r2.status_code == 400

    # nothing recorded
    assert (await async_client.get("/donations/artist/artist-1")).json() == []


@pytest.mark.asyncio
async def test_webhook_success_records_donation(async_client, stripe_enabled):
    body, headers = _signed(_intent_event("payment_intent.succeeded", amount=5000, donation_type="monthly"))
    r = await async_client.post("/payments/webhook", content=body, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json() == {"received": True, "outcome": "completed"}

    # replays are ignored
    r_again = await async_client.post("/payments/webhook", content=body, headers=headers)
    assert r_again.json()["outcome"] == "duplicate"

    r2 = await async_client.get("/donations/artist/artist-1")
    rows = r2.json()
    assert len(rows) == 1
    d = rows[0]
    assert (d["amount"], d["platform_fee"], d["net_amount"]) == (50.0, 2.5, 47.5)
    assert d["status"] == "completed"
    assert d["is_recurring"] is True
    assert d["stripe_payment_intent_id"] == "pi_1"
    assert d["message"] == "keep going"


@pytest.mark.asyncio
async def test_webhook_failure_has_no_fee(async_client, stripe_enabled):
    from artsaas.db.mongo import get_db

    body, headers = _signed(_intent_event("payment_intent.payment_failed", intent_id="pi_2"))
    r = await async_client.post("/payments/webhook", content=body, headers=headers)
    assert r.json()["outcome"] == "failed"

    doc = get_db()["donations"].find_one({"stripe_payment_intent_id": "pi_2"})
    assert doc["status"] == "failed"
    assert (doc["platform_fee"], doc["net_amount"]) == (0.0, 0.0)
    assert get_db()["subscriptions"].count_documents({}) == 0


@pytest.mark.asyncio
async def test_webhook_other_events_ignored(async_client, stripe_enabled):
    event = {"id": "evt_9", "object": "event", "type": "charge.refunded", "data": {"object": {"id": "ch_1"}}}
    body, headers = _signed(event)
    r = await async_client.post("/payments/webhook", content=body, headers=headers)
    assert r.json()["outcome"] == "ignored"


@pytest.mark.asyncio
async def test_anonymous_donor_hidden(async_client, stripe_enabled):
    event = _intent_event("payment_intent.succeeded", intent_id="pi_3")
    event["data"]["object"]["metadata"]["is_anonymous"] = "true"
    body, headers = _signed(event)
    await async_client.post("/payments/webhook", content=body, headers=headers)
    rows = (await async_client.get("/donations/artist/artist-1")).json()
    assert rows[0]["donor_id"] is None
    assert rows[0]["is_anonymous"] is True
