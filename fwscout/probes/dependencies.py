"""Dependency-graph probe — which version of a package is installed?

The installed tree is read from ``npm list <name> --json``.  npm prints the
whole path from the project down to every copy of *name*; the first copy in
depth-first order wins.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from fwscout.errors import ProbeFailure
from fwscout.process import CommandRunner, CommandUnavailable, run_command

logger = logging.getLogger(__name__)

NPM_COMMAND = "npm.cmd" if sys.platform == "win32" else "npm"


@dataclass(frozen=True)
class InstalledDependency:
    name: str
    version: Optional[str]
    resolved: Optional[str] = None


class DependencyGraph(Protocol):
    """Looks up installed packages for a project directory."""

    def find(
        self,
        name: str,
        directory: str,
        depth: Optional[int] = None,
        include_dev: bool = True,
    ) -> InstalledDependency | None:
        """Return the first installed copy of *name*, or ``None``.

        *depth* ``None`` searches the whole tree; ``0`` only direct
        dependencies.  Must be side-effect free.
        """
        ...


def scan_dependency_tree(name: str, dependencies: Any) -> dict | None:
    """Depth-first search of an ``npm list --json`` dependency mapping."""
    if not isinstance(dependencies, dict):
        return None
    for dep_name, node in dependencies.items():
        if not isinstance(node, dict):
            continue
        if dep_name == name and not node.get("missing"):
            return node
        found = scan_dependency_tree(name, node.get("dependencies"))
        if found is not None:
            return found
    return None


class NpmDependencyGraph:
    """:class:`DependencyGraph` backed by the ``npm`` CLI."""

    def __init__(
        self,
        npm_command: str = NPM_COMMAND,
        timeout: Optional[float] = None,
        runner: CommandRunner = run_command,
    ) -> None:
        self.npm_command = npm_command
        self.timeout = timeout
        self._runner = runner

    def command(self, name: str, depth: Optional[int], include_dev: bool) -> list[str]:
        cmd = [self.npm_command, "list", name, "--json"]
        if not include_dev:
            cmd += ["--omit", "dev"]
        if depth is not None:
            cmd += ["--depth", str(depth)]
        return cmd

    def find(
        self,
        name: str,
        directory: str,
        depth: Optional[int] = None,
        include_dev: bool = True,
    ) -> InstalledDependency | None:
        # NODE_ENV=production would make npm hide dev dependencies on its own.
        env = {k: v for k, v in os.environ.items() if k != "NODE_ENV"}
        try:
            stdout, _stderr, _code = self._runner(
                self.command(name, depth, include_dev),
                cwd=directory,
                env=env,
                timeout=self.timeout,
            )
        except CommandUnavailable as exc:
            raise ProbeFailure(str(exc)) from exc

        # npm exits non-zero for "not found" and for unrelated tree problems
        # alike, so only the JSON body is trusted.
        if not stdout.strip():
            return None
        try:
            tree = json.loads(stdout)
        except json.JSONDecodeError as exc:
            raise ProbeFailure(f"Unreadable output from '{self.npm_command} list {name}': {exc}") from exc
        if not isinstance(tree, dict):
            return None

        node = scan_dependency_tree(name, tree.get("dependencies"))
        if node is None:
            logger.debug("%s is not installed in %s", name, directory)
            return None
        return InstalledDependency(
            name=name,
            version=node.get("version"),
            resolved=node.get("resolved"),
        )
