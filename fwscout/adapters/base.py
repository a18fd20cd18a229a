"""Build adapter protocol — what a detected framework hands to the orchestrator."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from fwscout.probes.dependencies import NPM_COMMAND


class BuildTarget(enum.Enum):
    HOSTING = "hosting"

    def __str__(self) -> str:
        return self.value


@dataclass
class BuildOptions:
    """Options passed to a framework initializer."""

    npm_command: str = NPM_COMMAND
    timeout: Optional[float] = None
    env: dict[str, str] = field(default_factory=dict)


@dataclass
class PathConfig:
    """Where staged output goes.

    ``hosting_dir`` receives static assets; ``functions_dir`` receives the
    server bundle for frameworks that want a backend.
    """

    hosting_dir: str
    functions_dir: str


@runtime_checkable
class FrameworkAdapter(Protocol):
    """Per-framework build contract."""

    def build(self) -> None:
        """Run the framework's production build in place."""
        ...

    def wants_backend(self) -> bool:
        """Return ``True`` if the built app needs a server to run."""
        ...

    def generate_filesystem_api(self, target: BuildTarget, paths: PathConfig) -> None:
        """Stage build output into the directories named by *paths*."""
        ...
