from pydantic import BaseModel, Field

from app.schemas.audit import Supplier


class DiscoverRequest(BaseModel):
    company_id: str = Field(..., min_length=1, max_length=200)


class StartAuditRequest(BaseModel):
    company_id: str = Field(..., min_length=1, max_length=200)
    suppliers: list[Supplier] | None = Field(
        default=None,
        description="Proveedores a auditar. Si se omite, se ejecuta el discovery",
    )


class DecisionRequest(BaseModel):
    approved: bool
    token: str | None = Field(default=None, description="Token de la decisión pendiente")
