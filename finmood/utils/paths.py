"""Locate the project root and the config file."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Optional

# Any of these marks a directory as the project root
SENTINELS = ("pyproject.toml", "config.yaml", ".git")


def _ancestors(path: Path) -> Iterator[Path]:
    path = path.resolve()
    yield path
    yield from path.parents


def find_project_root(start: Optional[Path] = None) -> Path:
    """Return the nearest directory above ``start`` holding a sentinel file.

    ``FINMOOD_ROOT`` wins when it names an existing directory. Without a
    ``start`` the search begins at the working directory, then at this
    package's install location. Falls back to the working directory.
    """
    override = os.getenv("FINMOOD_ROOT")
    if override:
        root = Path(override).expanduser().resolve()
        if root.is_dir():
            return root

    origins = [Path(start)] if start is not None else []
    origins += [Path.cwd(), Path(__file__).parent]

    for origin in origins:
        for directory in _ancestors(origin):
            if any((directory / name).exists() for name in SENTINELS):
                return directory
    return Path.cwd()


def resolve_config_path(config_path: str = "config.yaml") -> Path:
    """Resolve the YAML config file.

    Priority: FINMOOD_CONFIG env var, the given path if it exists, then the
    same file name under the project root. The returned path may not exist.
    """
    env_cfg = os.getenv("FINMOOD_CONFIG")
    cfg_path = Path(env_cfg).expanduser() if env_cfg else Path(config_path)
    if not cfg_path.exists():
        candidate = find_project_root() / cfg_path.name
        if candidate.exists():
            cfg_path = candidate
    return cfg_path
