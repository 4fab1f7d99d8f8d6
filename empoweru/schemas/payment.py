# empoweru/schemas/payment.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from empoweru.schemas.common import check_document_id


class PaymentIntentIn(BaseModel):
    price: float = Field(..., gt=0, description="Amount in major currency units")


class PaymentIntentOut(BaseModel):
    clientSecret: str


class PaymentIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    scholarshipId: str
    amount: Optional[float] = None
    transactionId: Optional[str] = None

    @field_validator("scholarshipId")
    @classmethod
    def check_scholarship_id(cls, value):
        return check_document_id(value)
