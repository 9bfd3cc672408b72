"""FastAPI dependency chain: slug -> boutique, request -> commerce API client."""

from collections.abc import AsyncGenerator

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marche241.core.exceptions import ProblemDetailError
from marche241.schemas.boutique import BoutiqueConfig
from marche241.services.boutique_registry import BoutiqueRegistry, get_registry
from marche241.services.commerce_client import CommerceClient, build_http_client

bearer_scheme = HTTPBearer(auto_error=False)


def get_boutique(
    slug: str,
    registry: BoutiqueRegistry = Depends(get_registry),
) -> tuple[str, BoutiqueConfig]:
    """Resolve the path slug. Unknown slugs raise BoutiqueNotFoundError (-> 404)."""
    return slug, registry.resolve(slug)


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Yield an httpx client bound to the commerce API, closed after the request."""
    async with build_http_client() as http:
        yield http


async def get_commerce_client(
    http: httpx.AsyncClient = Depends(get_http_client),
) -> CommerceClient:
    return CommerceClient(http)


async def get_admin_commerce_client(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> CommerceClient:
    """Client that forwards the admin's Bearer token to the commerce API."""
    if credentials is None:
        raise ProblemDetailError(
            status=401, title="Unauthorized", detail="Missing authorization header"
        )
    return CommerceClient(http, token=credentials.credentials)
