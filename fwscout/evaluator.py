"""Predicate evaluator — does one descriptor match one directory?

Three predicate families are checked in order, cheapest first, and the
first failure short-circuits the rest:

1. required files (glob, filesystem only)
2. dependency constraints (installed package tree)
3. capability probes (plugins in the parent toolchain's resolved config)

A :class:`~fwscout.errors.ProbeFailure` from any probe fails the descriptor
being evaluated and nothing else.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from fwscout.errors import ProbeFailure
from fwscout.models import DependencyConstraint, FrameworkDescriptor
from fwscout.probes.buildtool import ConfigProbe, ViteConfigProbe
from fwscout.probes.dependencies import DependencyGraph, NpmDependencyGraph
from fwscout.probes.files import any_match
from fwscout.probes.semver import satisfies
from fwscout.registry import DescriptorRegistry

logger = logging.getLogger(__name__)


class PredicateEvaluator:
    """Evaluates descriptor predicates against a directory.

    *config_probes* maps a toolchain name (``FrameworkDescriptor.toolchain``)
    to the probe that resolves its plugin list.
    """

    def __init__(
        self,
        registry: DescriptorRegistry,
        dependency_graph: Optional[DependencyGraph] = None,
        config_probes: Optional[Mapping[str, ConfigProbe]] = None,
    ) -> None:
        self.registry = registry
        self.dependency_graph = dependency_graph or NpmDependencyGraph()
        if config_probes is None:
            config_probes = {"vite": ViteConfigProbe()}
        self.config_probes = dict(config_probes)

    def evaluate(self, descriptor: FrameworkDescriptor, directory: str) -> bool:
        try:
            return (
                self._required_files(descriptor, directory)
                and self._dependencies(descriptor, directory)
                and self._capabilities(descriptor, directory)
            )
        except ProbeFailure as exc:
            logger.warning("Skipping %s: %s", descriptor.name, exc)
            return False

    # ---- predicate families ----

    def _required_files(self, descriptor: FrameworkDescriptor, directory: str) -> bool:
        for pattern in descriptor.required_files:
            if not any_match(directory, pattern):
                logger.debug("%s: no file matches %s", descriptor.key, pattern)
                return False
        return True

    def _dependencies(self, descriptor: FrameworkDescriptor, directory: str) -> bool:
        for constraint in descriptor.dependencies:
            if not self._dependency_satisfied(descriptor, constraint, directory):
                return False
        return True

    def _dependency_satisfied(
        self,
        descriptor: FrameworkDescriptor,
        constraint: DependencyConstraint,
        directory: str,
    ) -> bool:
        installed = self.dependency_graph.find(
            constraint.name,
            directory,
            depth=constraint.search_depth,
            include_dev=constraint.include_dev,
        )
        if installed is None or not installed.version:
            logger.debug("%s: %s is not installed", descriptor.key, constraint.name)
            return False
        if constraint.version_range and not satisfies(installed.version, constraint.version_range):
            logger.debug(
                "%s: %s@%s does not satisfy %s",
                descriptor.key,
                constraint.name,
                installed.version,
                constraint.version_range,
            )
            return False
        return True

    def _capabilities(self, descriptor: FrameworkDescriptor, directory: str) -> bool:
        if not descriptor.capability_probes or descriptor.parent is None:
            return True
        toolchain = self.registry.get(descriptor.parent).toolchain
        probe = self.config_probes.get(toolchain) if toolchain else None
        if probe is None:
            raise ProbeFailure(f"No configuration probe for toolchain '{toolchain}'")

        plugins = set(probe.active_plugins(directory))
        missing = [p for p in descriptor.capability_probes if p not in plugins]
        if missing:
            logger.debug("%s: %s plugins missing: %s", descriptor.key, toolchain, ", ".join(missing))
            return False
        return True
