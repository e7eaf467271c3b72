"""Layered YAML config for the tool wrappers.

Lookup order is the ``--config`` path, then ``$AGENT_SCRIPTS_CONFIG``, then
``./agent-scripts.yaml``, then ``~/.agent-scripts/config.yaml``. The first file
that exists and is non-empty wins; otherwise built-in defaults apply.
"""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import AgentScriptsConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "AGENT_SCRIPTS_CONFIG"

# ${VAR} or ${VAR:-fallback}
_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def candidate_paths(cli_path: str | None = None) -> list[Path]:
    """Config file locations in lookup order."""
    paths = []
    if cli_path:
        paths.append(Path(cli_path))
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        paths.append(Path(env_path))
    paths.append(Path("./agent-scripts.yaml"))
    paths.append(Path.home() / ".agent-scripts" / "config.yaml")
    return paths


def load_config(cli_path: str | None = None) -> AgentScriptsConfig:
    """Return the first usable config, or defaults when no file is found.

    Raises ValueError when a file exists but is not valid YAML or does not
    match the schema. A ``--config`` path that does not exist is also an error.
    """
    if cli_path and not Path(cli_path).exists():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in candidate_paths(cli_path):
        if not path.exists():
            continue
        try:
            raw = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if raw is None:
            continue
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config in {path}: top level must be a mapping")
        try:
            config = AgentScriptsConfig(**_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("Loaded config from %s", path)
        return config

    return AgentScriptsConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} and ${VAR:-default} references in strings."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `agent-scripts config init`
DEFAULT_CONFIG_TEMPLATE = """\
# agent-scripts.yaml

# Jira CLI (Atlassian acli)
acli:
  binary: "acli"
  timeout: 60
  # temp_dir: "/tmp"             # where --from-json payloads are written

# GitHub CLI
gh:
  binary: "gh"
  timeout: 120
  poll_interval: 5.0             # seconds between run status checks
  run_timeout: 600.0             # give up waiting for a run after this many seconds
  start_attempts: 30             # polls for a newly triggered run to appear
  start_interval: 2.0

# macOS UI automation
peekaboo:
  binary: "peekaboo"
  timeout: 60
  launch_settle: 0.5
  wait_timeout: 10.0
  wait_interval: 0.5

# Browser automation (chrome-devtools-mcp over stdio)
chrome:
  command: "npx"
  args: ["-y", "chrome-devtools-mcp@latest"]
  # env:
  #   CHROME_PATH: "${CHROME_PATH}"
  cleanup_patterns: ["Google Chrome for Testing", "chrome-devtools-mcp"]
  settle_delay: 0.5

# Logging
log_level: "info"                # debug | info | warn | error
"""
