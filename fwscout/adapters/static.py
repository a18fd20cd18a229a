"""Adapter for frameworks whose build output is a directory of static files."""

from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path

from fwscout.adapters.base import BuildOptions, BuildTarget, PathConfig
from fwscout.errors import BuildError
from fwscout.process import CommandRunner, CommandUnavailable, run_command

logger = logging.getLogger(__name__)


def read_package_json(directory: str | Path) -> dict:
    path = Path(directory) / "package.json"
    if not path.is_file():
        return {}
    try:
        raw = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise BuildError(f"Cannot read {path}: {exc}") from exc
    return raw if isinstance(raw, dict) else {}


class StaticSiteAdapter:
    """Builds with ``npm run build`` and serves *output_dir* as-is."""

    def __init__(
        self,
        directory: str,
        options: BuildOptions,
        output_dir: str = "dist",
        runner: CommandRunner = run_command,
    ) -> None:
        self.directory = str(Path(directory).resolve())
        self.options = options
        self.output_dir = output_dir
        self._runner = runner

    def build(self) -> None:
        scripts = read_package_json(self.directory).get("scripts") or {}
        if "build" not in scripts:
            logger.info("No build script in %s, skipping build", self.directory)
            return

        env = {**os.environ, **self.options.env}
        env.pop("NODE_ENV", None)
        try:
            _stdout, stderr, code = self._runner(
                [self.options.npm_command, "run", "build"],
                cwd=self.directory,
                env=env,
                timeout=self.options.timeout,
            )
        except CommandUnavailable as exc:
            raise BuildError(str(exc)) from exc
        if code != 0:
            tail = "\n".join(stderr.strip().splitlines()[-20:])
            raise BuildError(f"`{self.options.npm_command} run build` failed ({code}):\n{tail}")

    def wants_backend(self) -> bool:
        return False

    def generate_filesystem_api(self, target: BuildTarget, paths: PathConfig) -> None:
        if target is not BuildTarget.HOSTING:
            raise BuildError(f"Unsupported build target: {target}")
        source = Path(self.directory) / self.output_dir
        if not source.is_dir():
            raise BuildError(f"Build output not found: {source}")
        shutil.copytree(source, paths.hosting_dir, dirs_exist_ok=True)
