"""Payment wrapper tests against the fake commerce API."""

import httpx
import pytest

from marche241.schemas.payment import PaymentRequest
from marche241.services.commerce_client import CommerceApiError, CommerceClient
from marche241.services.payments import (
    INITIATION_FAILED_MESSAGE,
    PaymentInitiationError,
    PaymentVerificationError,
    initiate_mobile_payment,
    normalize_payment_status,
    verify_payment,
    wait_for_payment,
)
from tests.conftest import FakeCommerceApi, request_json


def _request(**overrides) -> PaymentRequest:
    data = {
        "email": "client@example.com",
        "msisdn": "074123456",
        "amount": 15000,
        "reference": "CMD-0001-1",
        "payment_system": "airtelmoney",
        "description": "Commande CMD-0001",
        "lastname": "Mba",
        "firstname": "Joline",
    }
    data.update(overrides)
    return PaymentRequest(**data)


async def test_initiate_success(commerce_api: FakeCommerceApi, commerce_client: CommerceClient):
    commerce_api.on(
        "POST",
        "/paiements/mobile",
        {"success": True, "bill_id": 5550012, "transaction_id": "TX-1", "status": "pending"},
    )
    result = await initiate_mobile_payment(commerce_client, _request())

    assert result.success is True
    assert result.bill_id == "5550012"
    assert result.transaction_id == "TX-1"
    assert result.status == "pending"


async def test_initiate_sends_exactly_one_request_with_payload(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient
):
    commerce_api.on("POST", "/paiements/mobile", {"success": True})
    await initiate_mobile_payment(commerce_client, _request(payment_system="moovmoney"))

    calls = commerce_api.calls_to("POST", "/paiements/mobile")
    assert len(calls) == 1
    body = request_json(calls[0])
    assert body["msisdn"] == "074123456"
    assert body["payment_system"] == "moovmoney"
    assert body["reference"] == "CMD-0001-1"
    assert body["amount"] == 15000


@pytest.mark.parametrize("status", [400, 500, 503])
async def test_initiate_non_2xx_raises_generic_error(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient, status: int
):
    commerce_api.on(
        "POST", "/paiements/mobile", {"message": "SQLSTATE secret internals"}, status=status
    )
    with pytest.raises(PaymentInitiationError) as exc_info:
        await initiate_mobile_payment(commerce_client, _request())

    assert str(exc_info.value) == INITIATION_FAILED_MESSAGE
    assert "SQLSTATE" not in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, CommerceApiError)
    assert len(commerce_api.calls_to("POST", "/paiements/mobile")) == 1


async def test_initiate_network_error_raises_generic_error(commerce_api: FakeCommerceApi):
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    commerce_api.on("POST", "/paiements/mobile", handler=_boom)
    async with commerce_api.http_client() as http:
        with pytest.raises(PaymentInitiationError) as exc_info:
            await initiate_mobile_payment(CommerceClient(http), _request())

    assert exc_info.type is PaymentInitiationError
    assert exc_info.value.message == INITIATION_FAILED_MESSAGE
    assert len(commerce_api.calls) == 1


async def test_initiate_gateway_rejection_raises_generic_error(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient
):
    commerce_api.on("POST", "/paiements/mobile", {"success": False, "message": "Solde insuffisant"})
    with pytest.raises(PaymentInitiationError):
        await initiate_mobile_payment(commerce_client, _request())


async def test_initiate_malformed_body_raises_generic_error(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient
):
    commerce_api.on("POST", "/paiements/mobile", ["not", "an", "object"])
    with pytest.raises(PaymentInitiationError):
        await initiate_mobile_payment(commerce_client, _request())


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("paye", "paye"),
        ("PAID", "paye"),
        ("processed", "paye"),
        ("failed", "echec"),
        ("echec", "echec"),
        ("refunded", "rembourse"),
        ("rembourse", "rembourse"),
        ("pending", "pending"),
        (None, None),
    ],
)
def test_normalize_payment_status(raw, expected):
    assert normalize_payment_status(raw) == expected


async def test_verify_reads_transaction_status(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient
):
    commerce_api.on(
        "GET",
        "/paiements/verification/B-1",
        {"success": True, "transaction": {"id": 42, "statut": "paye", "montant": 15000}},
    )
    result = await verify_payment(commerce_client, "B-1")
    assert result.success is True
    assert result.status == "paye"
    assert result.transaction_id == "42"
    assert result.amount == 15000


async def test_verify_falls_back_to_state_then_status(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient
):
    commerce_api.on(
        "GET", "/paiements/verification/B-2", {"success": True, "state": "ready", "status": "x"}
    )
    commerce_api.on("GET", "/paiements/verification/B-3", {"success": True, "status": "pending"})

    assert (await verify_payment(commerce_client, "B-2")).status == "ready"
    assert (await verify_payment(commerce_client, "B-3")).status == "pending"


async def test_verify_failure_raises_generic_error(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient
):
    commerce_api.on("GET", "/paiements/verification/B-4", {"message": "boom"}, status=500)
    with pytest.raises(PaymentVerificationError):
        await verify_payment(commerce_client, "B-4")


@pytest.mark.parametrize(
    "payload",
    [
        {"success": True, "transaction": {"id": 1, "statut": "paye", "montant": "n/a"}},
        {"success": True, "transaction": "paye"},
        {"success": True, "transaction": [1, 2]},
    ],
)
async def test_verify_malformed_answer_raises_generic_error(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient, payload: dict
):
    commerce_api.on("GET", "/paiements/verification/B-9", payload)
    with pytest.raises(PaymentVerificationError) as exc_info:
        await verify_payment(commerce_client, "B-9")
    assert exc_info.value.message == "Impossible de vérifier le paiement. Veuillez réessayer."


async def test_wait_returns_on_terminal_status(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient
):
    answers = iter(
        [
            {"success": True, "status": "pending"},
            {"success": False},
            {"success": True, "status": "PROCESSED"},
        ]
    )
    commerce_api.on(
        "GET",
        "/paiements/verification/B-5",
        handler=lambda _r: httpx.Response(200, json=next(answers)),
    )
    result = await wait_for_payment(commerce_client, "B-5", duration=30, interval=0)
    assert result.status == "paye"
    assert len(commerce_api.calls) == 3


async def test_wait_normalizes_refund(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient
):
    commerce_api.on("GET", "/paiements/verification/B-6", {"success": True, "status": "refunded"})
    result = await wait_for_payment(commerce_client, "B-6", duration=30, interval=0)
    assert result.status == "rembourse"


async def test_wait_returns_last_pending_result_at_deadline(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient
):
    commerce_api.on("GET", "/paiements/verification/B-7", {"success": True, "status": "pending"})
    result = await wait_for_payment(commerce_client, "B-7", duration=0, interval=0)
    assert result.success is True
    assert result.status == "pending"
    assert len(commerce_api.calls) == 1


async def test_wait_invalid_answer_at_deadline_is_failure(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient
):
    commerce_api.on("GET", "/paiements/verification/B-8", {"success": False, "message": "KO"})
    result = await wait_for_payment(commerce_client, "B-8", duration=0, interval=0)
    assert result.success is False
    assert result.status == "echec"
    assert result.message == "KO"


async def test_wait_reraises_error_at_deadline(
    commerce_api: FakeCommerceApi, commerce_client: CommerceClient
):
    commerce_api.on("GET", "/paiements/verification/B-9", {}, status=502)
    with pytest.raises(PaymentVerificationError):
        await wait_for_payment(commerce_client, "B-9", duration=0, interval=0)


def test_payment_request_rejects_bad_input():
    with pytest.raises(ValueError):
        _request(amount=0)
    with pytest.raises(ValueError):
        _request(payment_system="orange")
    with pytest.raises(ValueError):
        _request(email="not-an-email")
    with pytest.raises(ValueError):
        _request(msisdn="07-12")
