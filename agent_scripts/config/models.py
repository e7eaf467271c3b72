from pydantic import BaseModel, Field
from typing import Literal


class AcliConfig(BaseModel):
    binary: str = "acli"
    timeout: int = 60
    temp_dir: str | None = None


class GhConfig(BaseModel):
    binary: str = "gh"
    timeout: int = 120
    poll_interval: float = 5.0
    run_timeout: float = 600.0
    start_attempts: int = 30
    start_interval: float = 2.0


class PeekabooConfig(BaseModel):
    binary: str = "peekaboo"
    timeout: int = 60
    launch_settle: float = 0.5
    wait_timeout: float = 10.0
    wait_interval: float = 0.5


class ChromeConfig(BaseModel):
    command: str = "npx"
    args: list[str] = ["-y", "chrome-devtools-mcp@latest"]
    env: dict[str, str] = {}
    cleanup_patterns: list[str] = ["Google Chrome for Testing", "chrome-devtools-mcp"]
    settle_delay: float = 0.5


class AgentScriptsConfig(BaseModel):
    acli: AcliConfig = Field(default_factory=AcliConfig)
    gh: GhConfig = Field(default_factory=GhConfig)
    peekaboo: PeekabooConfig = Field(default_factory=PeekabooConfig)
    chrome: ChromeConfig = Field(default_factory=ChromeConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
