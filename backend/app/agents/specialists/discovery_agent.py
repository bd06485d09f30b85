"""
Supplier Discovery Agent.

This module implements the collaborator that lists the key suppliers of a
company. The LLM produces a realistic supplier list; any failure degrades
to a fixed fallback list so an audit can always start.

Example:
    from app.agents.specialists import SupplierDiscoveryAgent

    agent = SupplierDiscoveryAgent(llm=llm_service, logger=agent_logger)
    suppliers = await agent.discover("Tata Motors")
"""

import time
from typing import Any, Optional

from pydantic import ValidationError

from app.agents.base import BaseAuditAgent, LLMProtocol, LoggerProtocol
from app.agents.prompts import DISCOVERY_PROMPT
from app.core.config import settings
from app.core.exceptions import LLMInvocationError
from app.schemas.audit import Supplier

FALLBACK_SUPPLIERS: tuple[Supplier, ...] = (
    Supplier(
        id="1",
        name="Global Steel Co",
        industry="Raw Materials",
        location="Mumbai, India",
        estimated_emissions=0.8,
        compliance_flags=2,
    ),
    Supplier(
        id="2",
        name="TechChip Solutions",
        industry="Electronics",
        location="Shenzhen, China",
        estimated_emissions=0.4,
        compliance_flags=0,
    ),
    Supplier(
        id="3",
        name="EcoLogistics",
        industry="Transport",
        location="Berlin, Germany",
        estimated_emissions=0.3,
        compliance_flags=0,
    ),
)


def _to_supplier(raw: dict, index: int, stamp: int) -> Supplier:
    """Convierte un item del LLM (camelCase) en Supplier con id generado."""
    return Supplier(
        id=f"sup-{index}-{stamp}",
        name=raw.get("name", ""),
        industry=raw.get("industry") or "Unknown",
        location=raw.get("location") or "Unknown",
        estimated_emissions=raw.get("estimatedEmissions", raw.get("estimated_emissions", 0.0)),
        compliance_flags=raw.get("complianceFlags", raw.get("compliance_flags", 0)),
    )


class SupplierDiscoveryAgent(BaseAuditAgent):
    """
    Discovery collaborator backed by the LLM.

    Returns suppliers in the order the model lists them. Malformed entries
    are skipped; if none survive, the fallback list is returned.
    """

    NAME: str = "discovery"

    def __init__(
        self,
        llm: LLMProtocol,
        logger: Optional[LoggerProtocol] = None,
        supplier_count: Optional[int] = None,
    ) -> None:
        super().__init__(llm=llm, logger=logger)
        self.supplier_count = supplier_count or settings.discovery_supplier_count

    async def discover(self, company_id: str) -> list[Supplier]:
        suppliers, _ = await self.discover_with_source(company_id)
        return suppliers

    async def discover_with_source(self, company_id: str) -> tuple[list[Supplier], bool]:
        """Devuelve (proveedores, from_fallback). from_fallback=True si se usó la lista fija."""
        self._log_enter({"company_id": company_id})

        try:
            payload: Any = await self._invoke_json(
                DISCOVERY_PROMPT.format(company_id=company_id, count=self.supplier_count)
            )
            if isinstance(payload, dict):
                payload = payload.get("suppliers", [])
            if not isinstance(payload, list):
                raise LLMInvocationError("Expected a JSON array of suppliers")

            stamp = int(time.time() * 1000)
            suppliers: list[Supplier] = []
            for index, raw in enumerate(payload):
                try:
                    suppliers.append(_to_supplier(raw, index, stamp))
                except (ValidationError, AttributeError) as e:
                    self._log_debug(f"Skipping malformed supplier #{index}: {e}")

            if not suppliers:
                raise LLMInvocationError("No valid suppliers in model reply")

            self._log_exit(f"{len(suppliers)} suppliers discovered")
            return suppliers, False

        except Exception as e:
            self._log_error(e)
            self._log_exit(f"Discovery failed - using {len(FALLBACK_SUPPLIERS)} fallback suppliers")
            return list(FALLBACK_SUPPLIERS), True
