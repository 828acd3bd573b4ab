# artsaas/routes/donations.py
from fastapi import APIRouter, Depends, HTTPException
from ..core.deps import current_db, current_user
from ..models.donation import DonationCreate, DonationRepo
from ..services.donations import DonationAmountError, check_amount, platform_fee

router = APIRouter()


@router.post("", summary="Pledge a donation (pending until paid)")
async def create_donation(payload: DonationCreate, db=Depends(current_db), user=Depends(current_user)):
    try:
        check_amount(payload.amount, payload.currency)
    except DonationAmountError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return await DonationRepo(db).create(user["sub"], payload)


@router.get("/quote", summary="Fee breakdown for an amount")
async def quote(amount: float, currency: str = "USD"):
    try:
        check_amount(amount, currency)
    except DonationAmountError as e:
        raise HTTPException(status_code=422, detail=str(e))
    fee, net = platform_fee(amount)
    return {"amount": amount, "currency": currency.upper(), "platform_fee": fee, "net_amount": net}


@router.get("/artist/{artist_id}", summary="Completed donations received by an artist")
async def artist_donations(artist_id: str, db=Depends(current_db)):
    rows = await DonationRepo(db).completed_for_artist(artist_id)
    # anonymous donors stay anonymous
    return [{**r, "donor_id": None} if r.get("is_anonymous") else r for r in rows]
