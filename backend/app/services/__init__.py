from app.services.llm_factory import check_groq_health, get_agent_llm, get_llm
from app.services.audit_sessions import AuditSession, AuditSessionManager
from app.services.container import get_container, reset_container

__all__ = [
    "get_llm",
    "get_agent_llm",
    "check_groq_health",
    "AuditSession",
    "AuditSessionManager",
    "get_container",
    "reset_container",
]
