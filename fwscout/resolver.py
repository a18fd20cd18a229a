"""Recursive resolver — walk the descriptor forest, parent-gated, depth-first."""

from __future__ import annotations

import logging
from typing import Optional

from fwscout.errors import ConfigurationError
from fwscout.evaluator import PredicateEvaluator
from fwscout.models import FrameworkDescriptor, MatchRecord
from fwscout.registry import DescriptorRegistry

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


class Resolver:
    """Collects every ``(depth, descriptor)`` that matches a directory.

    A child is only evaluated once its parent has matched, so expensive
    probes (resolving a bundler's plugins) never run for a directory whose
    cheaper prerequisite already failed.
    """

    def __init__(
        self,
        registry: DescriptorRegistry,
        evaluator: PredicateEvaluator,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.registry = registry
        self.evaluator = evaluator
        self.max_depth = max_depth

    def resolve(self, directory: str) -> set[MatchRecord]:
        return self._resolve(directory, 1, None)

    def _resolve(
        self,
        directory: str,
        depth: int,
        parent: Optional[FrameworkDescriptor],
    ) -> set[MatchRecord]:
        children = self.registry.children_of(parent)
        if children and depth > self.max_depth:
            raise ConfigurationError(
                f"Framework forest is deeper than {self.max_depth} levels below "
                f"'{parent.key if parent else '<root>'}'"
            )

        matches: set[MatchRecord] = set()
        for descriptor in children:
            if not self.evaluator.evaluate(descriptor, directory):
                continue
            logger.debug("Matched %s at depth %d", descriptor.key, depth)
            matches.add(MatchRecord(depth, descriptor))
            matches |= self._resolve(directory, depth + 1, descriptor)
        return matches
