"""Endpoints de discovery de proveedores."""

from fastapi import APIRouter

from app.core.cache import TTLCache
from app.core.config import settings
from app.core.logging import get_logger
from app.schemas import DiscoverRequest, DiscoverResponse, Supplier
from app.services import get_container

logger = get_logger(__name__)
router = APIRouter(prefix="/suppliers", tags=["Suppliers"])

_discovery_cache = TTLCache[tuple[Supplier, ...]](
    ttl_seconds=settings.discovery_cache_ttl_seconds,
    max_size=settings.discovery_cache_max_size,
)


def invalidate_cache() -> None:
    """Invalida los resultados de discovery cacheados."""
    _discovery_cache.clear()


async def discover_suppliers(company_id: str) -> tuple[list[Supplier], bool, bool]:
    """
    Devuelve (proveedores, cached, fallback).

    Cachea por identificador de empresa normalizado. La lista de fallback no se
    cachea: el siguiente request vuelve a consultar al LLM.
    """
    cached = _discovery_cache.get(company_id)
    if cached is not None:
        logger.info(f"[DISCOVER] Cache HIT for '{company_id[:60]}'")
        return list(cached), True, False

    suppliers, from_fallback = await get_container().discovery.discover_with_source(company_id)
    if from_fallback:
        logger.warning(f"[DISCOVER] Fallback suppliers for '{company_id[:60]}' - not cached")
    else:
        _discovery_cache.set(company_id, tuple(suppliers))
    return suppliers, False, from_fallback


@router.post("/discover", response_model=DiscoverResponse)
async def discover(request: DiscoverRequest) -> DiscoverResponse:
    """Lista los proveedores clave de una empresa."""
    suppliers, cached, fallback = await discover_suppliers(request.company_id)
    return DiscoverResponse(company_id=request.company_id, suppliers=suppliers, cached=cached, fallback=fallback)
