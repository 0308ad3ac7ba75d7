"""
Resolve caller-supplied paths against the repository root.

A relative ``catalog_path`` means the same file whether the server was
started from the repo, from an MCP client config, or from a test runner.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from config import get_config


def resolve_repo_relative_path(path: Union[str, Path]) -> Path:
    """Return ``path`` as-is when absolute, otherwise under the repo root."""
    candidate = Path(path).expanduser()
    return candidate if candidate.is_absolute() else get_config().repo_root / candidate


def resolve_catalog_path(catalog_path: str | None = None) -> Path:
    """
    Pick the stage catalog for a tool call.

    An explicit ``catalog_path`` wins; otherwise the configured catalog
    (GRADRADAR_STAGE_CATALOG or the bundled data/stage_catalog.yaml) is used.
    """
    if catalog_path is None:
        return get_config().stage_catalog_path
    return resolve_repo_relative_path(catalog_path)
