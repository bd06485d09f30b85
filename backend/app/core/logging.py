import logging
import sys
from functools import lru_cache
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Directorio de logs (backend/logs/)
_LOG_DIR = Path(__file__).parent.parent.parent / "logs"

# Símbolos para visualizar el flujo
FLOW_SYMBOLS = {
    "start": "╔",
    "node": "║",
    "arrow": "→",
    "end": "╚",
    "route": "◆",
    "pause": "⏸",
}


# Loggers de terceros que solo interesan en WARNING o superior
_NOISY_LOGGERS = (
    "watchfiles",
    "httpx",
    "httpcore",
    "groq",
    "langsmith",
    "urllib3",
)

_LOG_FILE = "supply_chain_auditor.log"


def _file_handler(retention_days: int) -> logging.Handler | None:
    """Archivo con rotación diaria en backend/logs/. None si el directorio no es escribible."""
    try:
        _LOG_DIR.mkdir(exist_ok=True)
        return TimedRotatingFileHandler(
            _LOG_DIR / _LOG_FILE,
            when="midnight",
            backupCount=retention_days,
            encoding="utf-8",
        )
    except OSError as e:
        print(f"[logging] File logging disabled: {e}", file=sys.stderr)
        return None


def _configure_root_logger(level: LogLevel, to_file: bool, retention_days: int) -> None:
    """Configura el logger raíz una sola vez (consola + archivo opcional)."""
    root = logging.getLogger()
    if root.handlers:
        return

    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if to_file:
        file_handler = _file_handler(retention_days)
        if file_handler is not None:
            handlers.append(file_handler)

    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(level)


@lru_cache(maxsize=128)
def get_logger(name: str) -> logging.Logger:
    """
    Retorna un logger configurado para el módulo especificado.

    Uso:
        from app.core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Mensaje")
    """
    from app.core.config import settings

    _configure_root_logger(settings.log_level, settings.log_to_file, settings.log_retention_days)
    return logging.getLogger(name)


class AgentLogger:
    """Logger especializado para trazabilidad del workflow de auditoría."""

    def __init__(self, agent_name: str):
        self._logger = get_logger(f"agent.{agent_name}")
        self.agent_name = agent_name

    def pipeline_start(self, company_id: str, supplier_count: int, run_id: str | None = None) -> None:
        """Log inicio de una corrida de auditoría."""
        self._logger.info("=" * 70)
        self._logger.info(f"{FLOW_SYMBOLS['start']}══ AUDIT START ═════════════════════════════════════════════════════")
        self._logger.info(f"{FLOW_SYMBOLS['node']} Company: {company_id[:100]} | Suppliers: {supplier_count}")
        if run_id:
            self._logger.info(f"{FLOW_SYMBOLS['node']} Run: {run_id}")
        self._logger.info(
            f"{FLOW_SYMBOLS['node']} Flow: gather_signals → score → evaluate_policy → [await_decision] → finalize"
        )
        self._logger.info("=" * 70)

    def pipeline_end(self, summary: dict) -> None:
        """Log fin de la corrida con resumen por disposición."""
        self._logger.info("=" * 70)
        self._logger.info(f"{FLOW_SYMBOLS['end']}══ AUDIT {summary.get('status', 'completed').upper()} ═══════════════════════════════════════════════")
        self._logger.info(f"   {FLOW_SYMBOLS['route']} Suppliers finalized: {summary.get('finalized', 0)}/{summary.get('total', 0)}")
        for status, count in summary.get("by_status", {}).items():
            self._logger.info(f"   {FLOW_SYMBOLS['route']} {status}: {count}")
        if summary.get("error"):
            self._logger.info(f"   {FLOW_SYMBOLS['route']} Error: {summary['error']}")
        self._logger.info("=" * 70)

    def node_enter(self, node: str, state: dict | None = None) -> None:
        subject = (state.get("supplier_name") or state.get("company_id", "N/A")) if state else "N/A"
        self._logger.debug(f"{FLOW_SYMBOLS['node']} [{node.upper()}] {FLOW_SYMBOLS['arrow']} Entering | {subject}")

    def node_exit(self, node: str, result: str | None = None) -> None:
        self._logger.debug(f"{FLOW_SYMBOLS['node']} [{node.upper()}] {FLOW_SYMBOLS['arrow']} Exiting | {result or 'OK'}")

    def routing_decision(self, from_node: str, to_node: str, reason: str) -> None:
        """Log decisión de enrutamiento entre nodos."""
        self._logger.debug(f"{FLOW_SYMBOLS['route']} ROUTING: {from_node} → {to_node} | Reason: {reason}")

    def hitl_suspended(self, supplier_name: str, score: float, token: str) -> None:
        """Log suspensión del pipeline a la espera de un revisor."""
        self._logger.warning(
            f"{FLOW_SYMBOLS['pause']} HITL SUSPENDED: {supplier_name} (score={score:.3f}, token={token[:8]})"
        )

    def hitl_resolved(self, supplier_name: str, approved: bool) -> None:
        """Log reanudación del pipeline tras la decisión humana."""
        decision = "APPROVED (override)" if approved else "REJECTED"
        self._logger.info(f"{FLOW_SYMBOLS['route']} HITL RESOLVED: {supplier_name} → {decision}")

    def warning(self, message: str) -> None:
        self._logger.warning(f"{FLOW_SYMBOLS['node']} [{self.agent_name}] {message}")

    def error(self, node: str, error: Exception) -> None:
        self._logger.error(f"{FLOW_SYMBOLS['node']} [{node.upper()}] ERROR: {type(error).__name__}: {error}", exc_info=True)

    def debug(self, node: str, message: str) -> None:
        self._logger.debug(f"{FLOW_SYMBOLS['node']} [{node}] {message}")
