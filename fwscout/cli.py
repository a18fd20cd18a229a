"""CLI — click-based command-line interface."""

from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path

import click

from fwscout.adapters.base import BuildOptions, BuildTarget, PathConfig
from fwscout.config import FwscoutConfig, load_config
from fwscout.discovery import discover, evaluator_from_config, registry_from_config
from fwscout.errors import BuildError, ConfigurationError
from fwscout.models import ResolutionOutcome
from fwscout.registry import DescriptorRegistry, default_registry
from fwscout.report import render_json, render_text


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Log every predicate decision to stderr.")
def main(verbose: bool) -> None:
    """fwscout — detect the web framework that governs a source directory."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load(path: str, config_path: str | None, imports: tuple[str, ...]) -> tuple[FwscoutConfig, DescriptorRegistry]:
    cfg = load_config(scan_path=path, config_path=config_path)
    stripped = tuple(i[len("import:"):] if i.startswith("import:") else i for i in imports)
    try:
        registry = registry_from_config(cfg, stripped)
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    return cfg, registry


def _discover(path: str, cfg: FwscoutConfig, registry: DescriptorRegistry) -> ResolutionOutcome:
    try:
        return discover(
            path,
            registry=registry,
            evaluator=evaluator_from_config(registry, cfg),
            max_depth=cfg.discovery.max_depth,
            warn=False,
        )
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ───────────────────────────────────────────────────────────────────
# detect
# ───────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.option("--format", "fmt", default="text",
              type=click.Choice(["text", "json"], case_sensitive=False),
              help="Output format.")
@click.option("--config", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False),
              help="Explicit config file (skips .fwscout.yml lookup).")
@click.option("--framework", "imports", multiple=True,
              help="Extra descriptors: import:pkg.module:ATTR (repeatable).")
@click.option("--no-color", is_flag=True, default=False, help="Plain text output.")
def detect(
    path: str,
    fmt: str,
    config_path: str | None,
    imports: tuple[str, ...],
    no_color: bool,
) -> None:
    """Detect the framework used by the project at PATH."""
    source_dir = str(Path(path).resolve())
    cfg, registry = _load(source_dir, config_path, imports)
    outcome = _discover(source_dir, cfg, registry)

    if fmt == "json":
        click.echo(render_json(outcome, source_dir))
    else:
        click.echo(render_text(outcome, source_dir, color=not no_color))

    sys.exit(0 if outcome.detected else 1)


# ───────────────────────────────────────────────────────────────────
# build
# ───────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.option("--out", "out_dir", default=None, type=click.Path(file_okay=False),
              help="Staging directory (default: <PATH>/.fwscout).")
@click.option("--config", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False),
              help="Explicit config file (skips .fwscout.yml lookup).")
@click.option("--framework", "imports", multiple=True,
              help="Extra descriptors: import:pkg.module:ATTR (repeatable).")
def build(
    path: str,
    out_dir: str | None,
    config_path: str | None,
    imports: tuple[str, ...],
) -> None:
    """Detect, build and stage the project at PATH."""
    source_dir = str(Path(path).resolve())
    cfg, registry = _load(source_dir, config_path, imports)
    outcome = _discover(source_dir, cfg, registry)

    descriptor = outcome.descriptor
    if descriptor is None:
        if outcome.conflicts:
            names = ", ".join(d.name for d in outcome.conflicts)
            click.echo(f"Error: Multiple conflicting frameworks discovered: {names}", err=True)
        else:
            click.echo("Error: Could not determine the web framework in use.", err=True)
        sys.exit(1)

    warning = descriptor.support_warning
    click.echo(f"Detected a {descriptor.name} codebase. {warning}".rstrip())

    dist = Path(out_dir) if out_dir else Path(source_dir) / cfg.build.output_dir
    hosting_dir = dist / "hosting"
    functions_dir = dist / "functions"
    if hosting_dir.exists():
        shutil.rmtree(hosting_dir)
    hosting_dir.mkdir(parents=True)

    options = BuildOptions(npm_command=cfg.discovery.npm_command)
    try:
        adapter = descriptor.initialize(source_dir, options)
        adapter.build()
        wants_backend = adapter.wants_backend()
        adapter.generate_filesystem_api(
            BuildTarget.HOSTING,
            PathConfig(hosting_dir=str(hosting_dir), functions_dir=str(functions_dir)),
        )
    except BuildError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Hosting:   {hosting_dir}")
    if wants_backend:
        click.echo(f"Functions: {functions_dir}")
    click.echo(f"webFramework: {descriptor.web_framework_id(wants_backend)}")


# ───────────────────────────────────────────────────────────────────
# frameworks
# ───────────────────────────────────────────────────────────────────

@main.group()
def frameworks() -> None:
    """Inspect the registered framework descriptors."""


@frameworks.command("list")
def frameworks_list() -> None:
    """List built-in frameworks as a tree."""
    registry = default_registry()

    def walk(parent: str | None, indent: int) -> None:
        for d in registry.children_of(parent):
            label = f"{'  ' * indent}{d.key}"
            click.echo(f"{label:<20} {d.name:<14} {d.support}")
            walk(d.key, indent + 1)

    click.echo(f"{'Key':<20} {'Name':<14} {'Support'}")
    click.echo("-" * 54)
    walk(None, 0)


@frameworks.command("describe")
@click.argument("key")
def frameworks_describe(key: str) -> None:
    """Describe a specific framework."""
    registry = default_registry()
    if key not in registry:
        click.echo(f"Framework '{key}' not found.", err=True)
        sys.exit(1)
    d = registry.get(key)
    click.echo(f"Key:       {d.key}")
    click.echo(f"Name:      {d.name}")
    click.echo(f"Type:      {d.type}")
    click.echo(f"Support:   {d.support}")
    click.echo(f"Chain:     {' > '.join(a.key for a in registry.ancestry(key))}")
    if d.required_files:
        click.echo(f"Files:     {', '.join(d.required_files)}")
    for dep in d.dependencies:
        version = dep.version_range or "*"
        depth = "any" if dep.search_depth is None else dep.search_depth
        dev = "" if dep.include_dev else ", no dev"
        click.echo(f"Requires:  {dep.name}@{version} (depth {depth}{dev})")
    if d.capability_probes:
        click.echo(f"Plugins:   {', '.join(d.capability_probes)}")
    if d.overrides:
        click.echo(f"Overrides: {', '.join(d.overrides)}")
