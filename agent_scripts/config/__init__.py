from .loader import load_config
from .models import (
    AcliConfig,
    AgentScriptsConfig,
    ChromeConfig,
    GhConfig,
    PeekabooConfig,
)

__all__ = [
    "AcliConfig",
    "AgentScriptsConfig",
    "ChromeConfig",
    "GhConfig",
    "PeekabooConfig",
    "load_config",
]
