"""Shared test fixtures for agent-scripts."""

import pytest
from unittest.mock import patch

from agent_scripts.config.models import AgentScriptsConfig
from agent_scripts.runner import CompletedCommand


@pytest.fixture
def sample_config():
    return AgentScriptsConfig()


@pytest.fixture
def completed():
    """Factory for CompletedCommand results handed back by a mocked runner."""

    def _make(stdout="", returncode=0, stderr="", argv=None):
        return CompletedCommand(
            argv=argv or ["tool"], returncode=returncode, stdout=stdout, stderr=stderr
        )

    return _make


@pytest.fixture
def mock_run(completed):
    """Patch run_command everywhere the wrappers import it.

    Yields the mock; its default return value is a successful empty run.
    """
    targets = [
        "agent_scripts.acli.base.run_command",
        "agent_scripts.gh.base.run_command",
        "agent_scripts.peekaboo.base.run_command",
    ]
    patchers = [patch(t) for t in targets]
    mocks = [p.start() for p in patchers]
    shared = mocks[0]
    for m in mocks[1:]:
        m.side_effect = lambda *a, **kw: shared(*a, **kw)
    shared.return_value = completed()
    yield shared
    for p in patchers:
        p.stop()
