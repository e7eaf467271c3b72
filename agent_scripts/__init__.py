"""agent-scripts - Markdown to ADF plus wrappers for acli, gh, peekaboo and Chrome."""

from agent_scripts.acli import AcliClient
from agent_scripts.adf import AdfDocument, markdown_to_adf, markdown_to_adf_string
from agent_scripts.chrome import ChromeSession
from agent_scripts.config import AgentScriptsConfig, load_config
from agent_scripts.gh import GhClient
from agent_scripts.peekaboo import PeekabooClient
from agent_scripts.results import CommandError, CommandResult

__version__ = "0.1.0"

__all__ = [
    "AcliClient",
    "AdfDocument",
    "AgentScriptsConfig",
    "ChromeSession",
    "CommandError",
    "CommandResult",
    "GhClient",
    "PeekabooClient",
    "load_config",
    "markdown_to_adf",
    "markdown_to_adf_string",
]
