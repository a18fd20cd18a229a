"""Discovery — resolve which framework governs a source directory."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from fwscout.config import FwscoutConfig
from fwscout.conflict import select
from fwscout.evaluator import PredicateEvaluator
from fwscout.models import FrameworkDescriptor, OutcomeStatus, ResolutionOutcome
from fwscout.probes.buildtool import ViteConfigProbe
from fwscout.probes.dependencies import NpmDependencyGraph
from fwscout.registry import DescriptorRegistry, default_registry, load_import_descriptors
from fwscout.resolver import DEFAULT_MAX_DEPTH, Resolver

logger = logging.getLogger(__name__)


def discover(
    directory: str,
    registry: Optional[DescriptorRegistry] = None,
    evaluator: Optional[PredicateEvaluator] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    warn: bool = True,
) -> ResolutionOutcome:
    """Return the framework that governs *directory*.

    *registry* defaults to the built-in forest and *evaluator* to one backed
    by ``npm`` and ``node``.  Ambiguous and missing detections are returned,
    not raised; only :class:`~fwscout.errors.ConfigurationError` escapes.
    """
    if registry is None:
        registry = default_registry()
    if evaluator is None:
        evaluator = PredicateEvaluator(registry)

    matches = Resolver(registry, evaluator, max_depth=max_depth).resolve(directory)
    outcome = select(matches)

    if warn and outcome.status is OutcomeStatus.AMBIGUOUS:
        logger.warning(
            "Multiple conflicting frameworks discovered: %s",
            ", ".join(d.name for d in outcome.conflicts),
        )
    elif warn and outcome.status is OutcomeStatus.UNDETECTED:
        logger.warning("Could not determine the web framework in use.")
    return outcome


# ---------------------------------------------------------------------------
# Construction from configuration
# ---------------------------------------------------------------------------


def registry_from_config(
    cfg: FwscoutConfig,
    imports: Iterable[str] = (),
) -> DescriptorRegistry:
    """Built-in forest adjusted by ``discovery.disabled`` / ``discovery.frameworks``.

    *imports* are extra ``pkg.module:ATTR`` strings (e.g. from the CLI) and
    are loaded after the configured ones.
    """
    extra: list[FrameworkDescriptor] = []
    for import_string in [*cfg.discovery.frameworks, *imports]:
        extra.extend(load_import_descriptors(import_string))
    return default_registry(disabled=cfg.discovery.disabled, extra=extra)


def evaluator_from_config(registry: DescriptorRegistry, cfg: FwscoutConfig) -> PredicateEvaluator:
    timeout = cfg.discovery.probe_timeout
    return PredicateEvaluator(
        registry,
        dependency_graph=NpmDependencyGraph(npm_command=cfg.discovery.npm_command, timeout=timeout),
        config_probes={"vite": ViteConfigProbe(node_command=cfg.discovery.node_command, timeout=timeout)},
    )
