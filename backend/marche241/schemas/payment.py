"""Mobile-money payment request/response schemas."""

import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_MSISDN_RE = re.compile(r"^\+?[0-9]{8,15}$")

PaymentSystem = Literal["airtelmoney", "moovmoney"]


class PaymentRequest(BaseModel):
    email: str = Field(..., max_length=255)
    msisdn: str = Field(..., min_length=8, max_length=16)
    amount: float = Field(..., gt=0)
    reference: str = Field(..., min_length=1, max_length=100)
    payment_system: PaymentSystem
    description: str = Field(..., max_length=500)
    lastname: str = Field(..., min_length=1, max_length=255)
    firstname: str = Field(..., min_length=1, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not _EMAIL_RE.match(v):
            raise ValueError("Invalid email address")
        return v

    @field_validator("msisdn")
    @classmethod
    def validate_msisdn(cls, v: str) -> str:
        if not _MSISDN_RE.match(v):
            raise ValueError("Phone number must contain 8 to 15 digits")
        return v


class PaymentResult(BaseModel):
    success: bool
    bill_id: str | None = None
    transaction_id: str | None = None
    status: str | None = None
    message: str | None = None
    redirect_url: str | None = None


class PaymentVerification(BaseModel):
    success: bool
    status: str | None = None
    message: str | None = None
    transaction_id: str | None = None
    amount: float | None = None
