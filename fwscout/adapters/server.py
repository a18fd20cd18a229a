"""Adapter for server-rendered frameworks that need a backend."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

from fwscout.adapters.base import BuildOptions, BuildTarget, PathConfig
from fwscout.adapters.static import StaticSiteAdapter
from fwscout.errors import BuildError
from fwscout.process import CommandRunner, run_command

# Kept between builds so repeated installs in the functions dir stay fast.
_PRESERVED = {"node_modules", "package-lock.json"}


def prepare_functions_dir(functions_dir: str | Path) -> Path:
    """Empty *functions_dir* except for the installed dependency tree."""
    dest = Path(functions_dir)
    if dest.is_dir():
        for entry in dest.iterdir():
            if entry.name in _PRESERVED:
                continue
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
    else:
        if dest.exists():
            dest.unlink()
        dest.mkdir(parents=True)
    return dest


class ServerAdapter(StaticSiteAdapter):
    """Static assets go to hosting, the server bundle goes to functions."""

    def __init__(
        self,
        directory: str,
        options: BuildOptions,
        output_dir: Optional[str] = None,
        public_dir: Optional[str] = "public",
        runner: CommandRunner = run_command,
    ) -> None:
        super().__init__(directory, options, output_dir=output_dir or "", runner=runner)
        self.public_dir = public_dir

    def wants_backend(self) -> bool:
        return True

    def generate_filesystem_api(self, target: BuildTarget, paths: PathConfig) -> None:
        if target is not BuildTarget.HOSTING:
            raise BuildError(f"Unsupported build target: {target}")
        root = Path(self.directory)

        Path(paths.hosting_dir).mkdir(parents=True, exist_ok=True)
        if self.public_dir and (root / self.public_dir).is_dir():
            shutil.copytree(root / self.public_dir, paths.hosting_dir, dirs_exist_ok=True)

        functions = prepare_functions_dir(paths.functions_dir)
        package_json = root / "package.json"
        if not package_json.is_file():
            raise BuildError(f"{package_json} is required to deploy a backend")
        shutil.copy2(package_json, functions / "package.json")
        if (root / ".npmrc").is_file():
            shutil.copy2(root / ".npmrc", functions / ".npmrc")

        if self.output_dir:
            built = root / self.output_dir
            if not built.is_dir():
                raise BuildError(f"Build output not found: {built}")
            shutil.copytree(built, functions / self.output_dir, dirs_exist_ok=True)
