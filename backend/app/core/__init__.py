from app.core.config import Settings, get_settings, settings
from app.core.logging import AgentLogger, get_logger

__all__ = ["AgentLogger", "Settings", "get_logger", "get_settings", "settings"]
