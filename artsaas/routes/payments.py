# artsaas/routes/payments.py
"""
Stripe endpoints: PaymentIntent for the donate form and the webhook receiver.
"""
from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from ..core.deps import current_db, current_user
from ..models.donation import DonationCreate
from ..services.donations import DonationAmountError
from ..services.stripe_service import StripeService, process_webhook_event

router = APIRouter()


def get_stripe() -> StripeService:
    return StripeService()


@router.post("/intent", summary="Create a Stripe PaymentIntent for a donation")
async def create_intent(
    payload: DonationCreate,
    user=Depends(current_user),
    svc: StripeService = Depends(get_stripe),
):
    if not svc.is_configured:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="payments_unavailable")
    try:
        result = svc.create_payment_intent(user["sub"], payload)
    except DonationAmountError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if not result.success:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)
    return result.data


@router.post("/webhook", summary="Stripe webhook receiver")
async def webhook(
    request: Request,
    stripe_signature: str = Header(default="", alias="Stripe-Signature"),
    db=Depends(current_db),
    svc: StripeService = Depends(get_stripe),
):
    payload = await request.body()
    verified = svc.verify_webhook(payload, stripe_signature)
    if not verified.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid_signature")
    outcome = await process_webhook_event(verified.data["event"], db)
    return {"received": True, "outcome": outcome}
