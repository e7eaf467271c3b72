from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def with_temp_json(data: Any, fn: Callable[[str], T], temp_dir: str | None = None) -> T:
    """Write ``data`` to a temporary JSON file, call ``fn(path)``, then delete the file."""
    with tempfile.NamedTemporaryFile(
        "w", prefix="acli-", suffix=".json", dir=temp_dir, delete=False
    ) as f:
        json.dump(data, f)
        path = Path(f.name)
    logger.debug("Wrote acli payload to %s", path)
    try:
        return fn(str(path))
    finally:
        path.unlink(missing_ok=True)
