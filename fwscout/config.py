"""Unified configuration loader for fwscout.

Configuration is resolved in priority order: **project > user > defaults**.

1. **Project-level** — ``.fwscout.yml`` in (or above) the source directory.
   Checked into version control, shared by the team.
2. **User-level** — ``~/.fwscout/config.yml``.
   Personal defaults across all projects.
3. **Built-in defaults** — hardcoded fallbacks.

Both files share the same format::

    # .fwscout.yml  or  ~/.fwscout/config.yml
    discovery:
      npm_command: npm
      node_command: node
      max_depth: 32
      probe_timeout: 120
      disabled:
        - express
      frameworks:
        - my_pkg.frameworks:DESCRIPTORS

    build:
      output_dir: .fwscout

Project-level values override user-level values.  CLI flags override both.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from fwscout.probes.dependencies import NPM_COMMAND
from fwscout.resolver import DEFAULT_MAX_DEPTH

CONFIG_FILENAME = ".fwscout.yml"
USER_CONFIG_DIR = Path.home() / ".fwscout"
USER_CONFIG_PATH = USER_CONFIG_DIR / "config.yml"
DEFAULT_PROBE_TIMEOUT = 120.0


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class DiscoveryConfig:
    """Discovery sub-configuration."""

    npm_command: str = NPM_COMMAND
    node_command: str = "node"
    max_depth: int = DEFAULT_MAX_DEPTH
    probe_timeout: Optional[float] = DEFAULT_PROBE_TIMEOUT
    disabled: list[str] = field(default_factory=list)
    frameworks: list[str] = field(default_factory=list)


@dataclass
class BuildConfig:
    """Build sub-configuration."""

    output_dir: str = ".fwscout"


@dataclass
class FwscoutConfig:
    """Top-level configuration container (discovery + build)."""

    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    build: BuildConfig = field(default_factory=BuildConfig)

    # Where the effective config was loaded from (None = defaults only).
    project_config_path: str | None = None
    user_config_path: str | None = None


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_config(
    scan_path: str | None = None,
    config_path: str | Path | None = None,
) -> FwscoutConfig:
    """Load merged configuration (project > user > defaults).

    Parameters
    ----------
    scan_path:
        Directory to search for ``.fwscout.yml``.  When *None*, only
        the user-level file (and defaults) are considered.
    config_path:
        Explicit config file path.  When given, *only* this file is
        loaded (no project/user search).
    """
    if config_path is not None:
        raw = _load_yaml(Path(config_path).expanduser())
        return _raw_to_config(raw, config_source=str(config_path))

    user_raw = _load_yaml(USER_CONFIG_PATH)
    user_source = str(USER_CONFIG_PATH) if user_raw else None

    project_raw: dict | None = None
    project_source: str | None = None
    if scan_path is not None:
        project_path = _find_project_config(scan_path)
        if project_path is not None:
            project_raw = _load_yaml(project_path)
            project_source = str(project_path)

    merged = _merge_raw(project_raw, user_raw)
    cfg = _raw_to_config(merged)
    cfg.project_config_path = project_source
    cfg.user_config_path = user_source
    return cfg


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _find_project_config(scan_path: str) -> Path | None:
    """Search for ``.fwscout.yml`` in *scan_path* and ancestors."""
    p = Path(scan_path)
    candidates = [p / CONFIG_FILENAME]
    if not (p / ".git").exists():
        for parent in p.parents:
            candidates.append(parent / CONFIG_FILENAME)
            if (parent / ".git").exists():
                break
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def _load_yaml(path: Path) -> dict | None:
    """Load a YAML file, returning *None* on missing/invalid files."""
    path = path.expanduser()
    if not path.is_file():
        return None
    try:
        raw = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError):
        return None
    return raw if isinstance(raw, dict) else None


def _merge_raw(
    project: dict | None,
    user: dict | None,
) -> dict:
    """Merge project and user raw dicts (project wins, section by section)."""
    base: dict = {}

    if user:
        for key, section in user.items():
            base[key] = dict(section) if isinstance(section, dict) else section

    if project:
        for key in ("discovery", "build"):
            section = project.get(key)
            if isinstance(section, dict):
                if not isinstance(base.get(key), dict):
                    base[key] = {}
                # List fields are replaced, not appended: the project is authoritative.
                base[key].update(section)

    return base


def _raw_to_config(
    raw: dict | None,
    config_source: str | None = None,
) -> FwscoutConfig:
    """Convert a raw YAML dict to a ``FwscoutConfig``."""
    if not raw:
        return FwscoutConfig(project_config_path=config_source)

    discovery_raw = raw.get("discovery", {})
    if not isinstance(discovery_raw, dict):
        discovery_raw = {}

    build_raw = raw.get("build", {})
    if not isinstance(build_raw, dict):
        build_raw = {}

    discovery_cfg = DiscoveryConfig(
        npm_command=str(discovery_raw.get("npm_command") or NPM_COMMAND),
        node_command=str(discovery_raw.get("node_command") or "node"),
        max_depth=_as_int(discovery_raw.get("max_depth"), DEFAULT_MAX_DEPTH),
        probe_timeout=_as_timeout(discovery_raw.get("probe_timeout", DEFAULT_PROBE_TIMEOUT)),
        disabled=_as_list(discovery_raw.get("disabled", [])),
        frameworks=_as_list(discovery_raw.get("frameworks", [])),
    )

    build_cfg = BuildConfig(
        output_dir=str(build_raw.get("output_dir") or ".fwscout"),
    )

    return FwscoutConfig(
        discovery=discovery_cfg,
        build=build_cfg,
        project_config_path=config_source,
    )


def _as_list(val: object) -> list[str]:
    """Coerce a value to a list of strings."""
    if isinstance(val, list):
        return [str(v) for v in val]
    if isinstance(val, str):
        return [val]
    return []


def _as_int(val: object, default: int, minimum: int = 1) -> int:
    """Coerce to an int no smaller than *minimum*, else *default*."""
    try:
        number = int(val) if val is not None else default
    except (TypeError, ValueError):
        return default
    return number if number >= minimum else default


def _as_timeout(val: object) -> float | None:
    """``0``, ``null`` and ``none`` all disable the timeout."""
    if val is None or (isinstance(val, str) and val.lower() == "none"):
        return None
    try:
        seconds = float(val)
    except (TypeError, ValueError):
        return DEFAULT_PROBE_TIMEOUT
    return seconds if seconds > 0 else None
