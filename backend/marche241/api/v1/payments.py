"""Mobile-money payment endpoints."""

from fastapi import APIRouter, Depends, Query

from marche241.core.dependencies import get_commerce_client
from marche241.schemas.payment import PaymentRequest, PaymentResult, PaymentVerification
from marche241.services.commerce_client import CommerceClient
from marche241.services.payments import (
    initiate_mobile_payment,
    verify_payment,
    wait_for_payment,
)

router = APIRouter()


@router.post("/mobile", response_model=PaymentResult)
async def initiate_payment(
    body: PaymentRequest,
    client: CommerceClient = Depends(get_commerce_client),
) -> PaymentResult:
    """Initiate an Airtel Money / Moov Money payment. Failures -> 502 generic message."""
    return await initiate_mobile_payment(client, body)


@router.get("/verification/{bill_id}", response_model=PaymentVerification)
async def get_payment_verification(
    bill_id: str,
    wait: bool = Query(False, description="Poll until a final status or the timeout"),
    client: CommerceClient = Depends(get_commerce_client),
) -> PaymentVerification:
    if wait:
        return await wait_for_payment(client, bill_id)
    return await verify_payment(client, bill_id)
