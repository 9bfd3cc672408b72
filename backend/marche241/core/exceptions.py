"""RFC 7807 Problem Details error handling."""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from marche241.services.boutique_registry import BoutiqueNotFoundError
from marche241.services.commerce_client import CommerceApiError
from marche241.services.orders import OrderCreationError
from marche241.services.payments import PaymentInitiationError, PaymentVerificationError

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"


class ProblemDetailError(Exception):
    """Raise for RFC 7807 problem+json responses."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: str,
        error_type: str | None = None,
    ):
        self.status = status
        self.title = title
        self.detail = detail
        self.error_type = error_type or "about:blank"


def _problem(request: Request, status: int, title: str, detail, **extra) -> JSONResponse:
    content = {
        "type": extra.pop("error_type", "about:blank"),
        "title": title,
        "status": status,
        "detail": detail,
        "instance": str(request.url.path),
    }
    content.update(extra)
    return JSONResponse(status_code=status, content=content, media_type=PROBLEM_JSON)


async def problem_detail_handler(request: Request, exc: ProblemDetailError) -> JSONResponse:
    return _problem(request, exc.status, exc.title, exc.detail, error_type=exc.error_type)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _problem(
        request,
        exc.status_code,
        exc.detail if isinstance(exc.detail, str) else "Error",
        exc.detail,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _problem(request, 422, "Validation Error", jsonable_errors(exc))


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may carry the raw exception object, which is not JSON serialisable
    return [
        {key: value for key, value in error.items() if key != "ctx"} for error in exc.errors()
    ]


async def boutique_not_found_handler(request: Request, exc: BoutiqueNotFoundError) -> JSONResponse:
    """Unknown slug: 404 with links to every boutique we do serve."""
    return _problem(
        request,
        404,
        "Boutique non trouvée",
        "La boutique que vous recherchez n'existe pas ou a été déplacée.",
        slug=exc.slug,
        boutiques=[link.model_dump() for link in exc.known],
    )


async def payment_initiation_handler(
    request: Request, exc: PaymentInitiationError
) -> JSONResponse:
    return _problem(request, 502, "Paiement non initié", exc.message)


async def payment_verification_handler(
    request: Request, exc: PaymentVerificationError
) -> JSONResponse:
    return _problem(request, 502, "Vérification impossible", exc.message)


async def order_creation_handler(request: Request, exc: OrderCreationError) -> JSONResponse:
    return _problem(request, 502, "Commande non créée", exc.message)


async def commerce_api_handler(request: Request, exc: CommerceApiError) -> JSONResponse:
    logger.warning("Commerce API error on %s: [%s] %s", request.url.path, exc.status, exc.message)
    if exc.status == 404:
        return _problem(request, 404, "Not Found", exc.message)
    return _problem(
        request,
        502,
        "Commerce API Error",
        "Le service est momentanément indisponible. Veuillez réessayer.",
    )
