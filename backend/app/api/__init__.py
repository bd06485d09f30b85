from fastapi import APIRouter

from app.api.routes import audits_router, suppliers_router

router = APIRouter()
router.include_router(suppliers_router)
router.include_router(audits_router)

__all__ = ["router"]
