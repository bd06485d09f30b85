"""Coleccion de routers de la API."""

from app.api.routes.audits import router as audits_router
from app.api.routes.suppliers import router as suppliers_router

__all__ = ["audits_router", "suppliers_router"]
