# empoweru/routers/payments.py
from fastapi import APIRouter, Depends, HTTPException, status

from empoweru.config import Settings, get_settings
from empoweru.core.auth import get_current_subject
from empoweru.database import get_db
from empoweru.integrations.payment import PaymentError
from empoweru.schemas.payment import PaymentIn, PaymentIntentIn, PaymentIntentOut
from empoweru.schemas.results import InsertResult
from empoweru.services import payment_service

router = APIRouter(tags=["Payments"])


@router.post("/create-payment-intent", response_model=PaymentIntentOut)
def create_payment_intent(
    body: PaymentIntentIn,
    subject: str = Depends(get_current_subject),
    db=Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        secret = payment_service.create_intent(db, settings, subject, body.price)
    except PaymentError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return PaymentIntentOut(clientSecret=secret)


@router.post("/payments", response_model=InsertResult, dependencies=[Depends(get_current_subject)])
def store_payment(payment: PaymentIn, db=Depends(get_db)):
    return payment_service.store(db, payment.model_dump(exclude_unset=True))
