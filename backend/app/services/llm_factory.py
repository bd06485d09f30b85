import httpx
from functools import lru_cache

from langchain_groq import ChatGroq

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

GROQ_API_URL = "https://api.groq.com/openai/v1"


@lru_cache
def get_llm(temperature: float = 0.0) -> ChatGroq:
    """
    Factory singleton para instancias de ChatGroq, una por temperatura.

    Rate Limit Tuning:
    - request_timeout: 60s (el reporte ejecutivo puede ser largo)
    - max_retries: 3 (errores transitorios de rate limit)
    """
    logger.info(f"Inicializando LLM: {settings.groq_model} (temp={temperature})")
    return ChatGroq(
        model=settings.groq_model,
        temperature=temperature,
        api_key=settings.groq_api_key,
        request_timeout=60,
        max_retries=3,
    )


def get_agent_llm(agent_name: str) -> ChatGroq:
    """LLM con la temperatura configurada para cada colaborador."""
    temperatures = {
        "discovery": settings.discovery_temperature,
        "monitor": settings.monitor_temperature,
        "reporting": settings.report_temperature,
    }
    return get_llm(temperature=temperatures.get(agent_name, 0.0))


async def check_groq_health() -> bool:
    """Verifica conectividad con Groq API."""
    try:
        async with httpx.AsyncClient(timeout=5.0) as client:
            response = await client.get(
                f"{GROQ_API_URL}/models",
                headers={"Authorization": f"Bearer {settings.groq_api_key}"},
            )
            return response.status_code == 200
    except httpx.HTTPError as e:
        logger.warning(f"Groq health check failed: {e}")
        return False
