"""Mobile-money payment initiation and verification.

``initiate_mobile_payment`` makes exactly one POST to the gateway and never
retries. Every failure is converted to ``PaymentInitiationError`` carrying a
generic, user-safe message; the real cause is logged and chained.
No payment state is kept locally: the gateway is the source of truth.
"""

import asyncio
import logging
import time

from pydantic import ValidationError

from marche241.core.config import settings
from marche241.schemas.payment import PaymentRequest, PaymentResult, PaymentVerification
from marche241.services.commerce_client import CommerceApiError, CommerceClient

logger = logging.getLogger(__name__)

INITIATE_PATH = "/paiements/mobile"
VERIFY_PATH = "/paiements/verification/{bill_id}"

INITIATION_FAILED_MESSAGE = "Impossible d'initier le paiement. Veuillez réessayer."
VERIFICATION_FAILED_MESSAGE = "Impossible de vérifier le paiement. Veuillez réessayer."

SUCCESS_STATUSES = frozenset({"paye", "paid", "processed"})
REFUND_STATUSES = frozenset({"rembourse", "refunded"})
FAILURE_STATUSES = frozenset({"echec", "failed"}) | REFUND_STATUSES


class PaymentInitiationError(Exception):
    def __init__(self, message: str = INITIATION_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


class PaymentVerificationError(Exception):
    def __init__(self, message: str = VERIFICATION_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


def _as_str(value) -> str | None:
    return None if value is None else str(value)


async def initiate_mobile_payment(
    client: CommerceClient, request: PaymentRequest
) -> PaymentResult:
    """Send one payment initiation request to the gateway and relay its answer."""
    try:
        data = await client.post(INITIATE_PATH, request.model_dump())
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected gateway response: {data!r}")
        result = PaymentResult(
            success=data.get("success", True),
            bill_id=_as_str(data.get("bill_id")),
            transaction_id=_as_str(data.get("transaction_id")),
            status=_as_str(data.get("status")),
            message=data.get("message"),
            redirect_url=data.get("redirect_url"),
        )
        if not result.success:
            raise ValueError(f"Gateway rejected payment: {result.message or 'no message'}")
    except (CommerceApiError, ValidationError, ValueError) as exc:
        logger.exception(
            "Payment initiation failed (reference=%s, system=%s)",
            request.reference,
            request.payment_system,
        )
        raise PaymentInitiationError() from exc

    logger.info(
        "Payment initiated (reference=%s, bill_id=%s)", request.reference, result.bill_id
    )
    return result


def normalize_payment_status(status: str | None) -> str | None:
    """Collapse the gateway's status synonyms to paye / echec / rembourse."""
    if status is None:
        return None
    lowered = status.lower()
    if lowered in SUCCESS_STATUSES:
        return "paye"
    if lowered in REFUND_STATUSES:
        return "rembourse"
    if lowered in FAILURE_STATUSES:
        return "echec"
    return status


def is_terminal_status(status: str | None) -> bool:
    return status is not None and status.lower() in SUCCESS_STATUSES | FAILURE_STATUSES


async def verify_payment(client: CommerceClient, bill_id: str) -> PaymentVerification:
    """Fetch the gateway status for ``bill_id``.

    The status may live in ``transaction.statut``, ``state`` or ``status``
    depending on the gateway version; the first one present wins.
    """
    try:
        data = await client.get(VERIFY_PATH.format(bill_id=bill_id))
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected gateway response: {data!r}")
        transaction = data.get("transaction") or {}
        if not isinstance(transaction, dict):
            raise ValueError(f"Unexpected transaction payload: {transaction!r}")
        status = transaction.get("statut") or data.get("state") or data.get("status")
        return PaymentVerification(
            success=bool(data.get("success", False)),
            status=_as_str(status),
            message=data.get("message"),
            transaction_id=_as_str(transaction.get("id")),
            amount=transaction.get("montant"),
        )
    except (CommerceApiError, ValidationError, ValueError, TypeError) as exc:
        logger.exception("Payment verification failed (bill_id=%s)", bill_id)
        raise PaymentVerificationError() from exc


async def wait_for_payment(
    client: CommerceClient,
    bill_id: str,
    duration: float | None = None,
    interval: float | None = None,
) -> PaymentVerification:
    """Poll ``verify_payment`` until a terminal status or the deadline.

    At the deadline an invalid answer resolves to ``echec``, a pending one is
    returned as-is and a verification error is re-raised.
    """
    duration = settings.PAYMENT_VERIFY_DURATION if duration is None else duration
    interval = settings.PAYMENT_VERIFY_INTERVAL if interval is None else interval
    started = time.monotonic()

    while True:
        try:
            result = await verify_payment(client, bill_id)
        except PaymentVerificationError:
            if time.monotonic() - started >= duration:
                raise
        else:
            expired = time.monotonic() - started >= duration
            if not result.success or not result.status:
                if expired:
                    return PaymentVerification(
                        success=False,
                        status="echec",
                        message=result.message or "Erreur lors de la vérification du paiement",
                    )
                logger.debug("Invalid verification answer for %s, retrying", bill_id)
            elif is_terminal_status(result.status):
                return result.model_copy(
                    update={"status": normalize_payment_status(result.status)}
                )
            elif expired:
                return result

        await asyncio.sleep(interval)
