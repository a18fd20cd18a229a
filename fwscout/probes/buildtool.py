"""Build-tool configuration probes.

A *pluggable toolchain* (Vite today) resolves its own configuration file and
exposes the plugins that are active for a production build.  Frameworks that
layer on top of it are told apart by which plugins are present.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from fwscout.errors import ProbeFailure
from fwscout.process import CommandRunner, CommandUnavailable, run_command

logger = logging.getLogger(__name__)


class ConfigProbe(Protocol):
    """Resolves a toolchain's effective configuration for a directory."""

    def active_plugins(self, directory: str) -> list[str]:
        """Return the names of plugins active in a production build."""
        ...


# Resolves the project-local vite so the user's own version and config loader
# are used.  argv[1] is the project root.
_VITE_SCRIPT = """\
const { pathToFileURL } = require("url");
const root = process.argv[1];
const entry = require.resolve("vite", { paths: [root] });
import(pathToFileURL(entry).href)
  .then((vite) => vite.resolveConfig({ root }, "build", "production"))
  .then((config) => {
    process.stdout.write(JSON.stringify(config.plugins.map((it) => it.name)));
  })
  .catch((err) => {
    process.stderr.write(String((err && err.stack) || err));
    process.exit(1);
  });
"""


def _display_path(directory: str) -> str:
    path = os.path.relpath(directory)
    return path if path.startswith("..") else f"./{path}"


class ViteConfigProbe:
    """:class:`ConfigProbe` that asks the project's own Vite install."""

    name = "vite"

    def __init__(
        self,
        node_command: str = "node",
        timeout: Optional[float] = None,
        runner: CommandRunner = run_command,
    ) -> None:
        self.node_command = node_command
        self.timeout = timeout
        self._runner = runner

    def active_plugins(self, directory: str) -> list[str]:
        root = str(Path(directory).resolve())
        env = {k: v for k, v in os.environ.items() if k != "NODE_ENV"}
        try:
            stdout, stderr, code = self._runner(
                [self.node_command, "-e", _VITE_SCRIPT, root],
                cwd=root,
                env=env,
                timeout=self.timeout,
            )
        except CommandUnavailable as exc:
            raise ProbeFailure(str(exc)) from exc

        if code != 0:
            logger.debug("vite config resolution failed: %s", stderr.strip())
            raise ProbeFailure(
                f"Could not load dependency vite in {_display_path(directory)}, "
                "have you run `npm install`?"
            )
        try:
            plugins = json.loads(stdout)
        except json.JSONDecodeError as exc:
            raise ProbeFailure(f"Unreadable vite configuration for {directory}: {exc}") from exc
        if not isinstance(plugins, list):
            raise ProbeFailure(f"Unexpected vite plugin list for {directory}: {plugins!r}")
        return [str(p) for p in plugins if p]
