"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from marche241.api.v1.router import api_v1_router
from marche241.core.config import settings
from marche241.core.exceptions import (
    ProblemDetailError,
    boutique_not_found_handler,
    commerce_api_handler,
    http_exception_handler,
    order_creation_handler,
    payment_initiation_handler,
    payment_verification_handler,
    problem_detail_handler,
    validation_exception_handler,
)
from marche241.core.middleware.cors import get_cors_config
from marche241.core.middleware.request_id import RequestIdMiddleware
from marche241.services.boutique_registry import BoutiqueNotFoundError
from marche241.services.commerce_client import CommerceApiError
from marche241.services.orders import OrderCreationError
from marche241.services.payments import PaymentInitiationError, PaymentVerificationError

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(
    title="Marché241 Storefront API",
    version="0.1.0",
    docs_url="/docs",
    openapi_url="/openapi.json",
)

# Middleware (last added = first executed)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(CORSMiddleware, **get_cors_config())

# Exception handlers (RFC 7807)
app.add_exception_handler(ProblemDetailError, problem_detail_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(BoutiqueNotFoundError, boutique_not_found_handler)
app.add_exception_handler(PaymentInitiationError, payment_initiation_handler)
app.add_exception_handler(PaymentVerificationError, payment_verification_handler)
app.add_exception_handler(OrderCreationError, order_creation_handler)
app.add_exception_handler(CommerceApiError, commerce_api_handler)

# Routes
app.include_router(api_v1_router, prefix="/api/v1")
