"""Aggregate all v1 sub-routers."""

from fastapi import APIRouter

from marche241.api.v1.admin import router as admin_router
from marche241.api.v1.boutiques import router as boutiques_router
from marche241.api.v1.health import router as health_router
from marche241.api.v1.payments import router as payments_router
from marche241.api.v1.storefront import router as storefront_router

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["health"])
api_v1_router.include_router(boutiques_router, prefix="/boutiques", tags=["boutiques"])
api_v1_router.include_router(storefront_router, prefix="/storefront", tags=["storefront"])
api_v1_router.include_router(payments_router, prefix="/paiements", tags=["paiements"])
api_v1_router.include_router(admin_router, prefix="/admin", tags=["admin"])
