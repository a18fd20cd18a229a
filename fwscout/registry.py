"""Descriptor registry — explicit registration and forest lookups."""

from __future__ import annotations

import importlib
from dataclasses import replace
from pathlib import PurePosixPath, PureWindowsPath
from typing import Iterable, Iterator, Optional

from fwscout.errors import ConfigurationError
from fwscout.models import FrameworkDescriptor
from fwscout.probes.semver import InvalidRange, parse_range


class DescriptorRegistry:
    """An ordered forest of :class:`FrameworkDescriptor` objects.

    Built once, then only read.  A parent must be registered before its
    children, which keeps the forest acyclic by construction.
    """

    def __init__(self) -> None:
        self._by_key: dict[str, FrameworkDescriptor] = {}

    # ---- write path ----

    def register(self, descriptor: FrameworkDescriptor) -> None:
        """Add *descriptor*, rejecting anything that would malform the forest."""
        key = descriptor.key
        if not key:
            raise ConfigurationError("Framework descriptor has an empty key")
        if key in self._by_key:
            raise ConfigurationError(f"Framework '{key}' is already registered")
        if descriptor.parent == key:
            raise ConfigurationError(f"Framework '{key}' cannot be its own parent")

        parent = None
        if descriptor.parent is not None:
            parent = self._by_key.get(descriptor.parent)
            if parent is None:
                raise ConfigurationError(
                    f"Framework '{key}' names unknown parent '{descriptor.parent}'"
                )

        for pattern in descriptor.required_files:
            if not pattern or PurePosixPath(pattern).is_absolute() or PureWindowsPath(pattern).is_absolute():
                raise ConfigurationError(
                    f"Framework '{key}' has an invalid required file pattern {pattern!r}"
                )

        for dep in descriptor.dependencies:
            if not dep.name:
                raise ConfigurationError(f"Framework '{key}' has a dependency with no name")
            if dep.search_depth is not None and dep.search_depth < 0:
                raise ConfigurationError(
                    f"Framework '{key}' has a negative search depth for '{dep.name}'"
                )
            if dep.version_range is not None:
                try:
                    parse_range(dep.version_range)
                except InvalidRange as exc:
                    raise ConfigurationError(f"Framework '{key}': {exc}") from exc

        if descriptor.capability_probes and (parent is None or parent.toolchain is None):
            raise ConfigurationError(
                f"Framework '{key}' declares plugin probes but its parent is not a "
                "pluggable toolchain"
            )

        self._by_key[key] = descriptor

    def validate(self) -> None:
        """Check cross references that may be declared before their target."""
        for descriptor in self._by_key.values():
            for other in descriptor.overrides:
                if other not in self._by_key:
                    raise ConfigurationError(
                        f"Framework '{descriptor.key}' overrides unknown framework '{other}'"
                    )

    # ---- read path ----

    def all_descriptors(self) -> tuple[FrameworkDescriptor, ...]:
        return tuple(self._by_key.values())

    def children_of(self, parent: Optional[str | FrameworkDescriptor]) -> list[FrameworkDescriptor]:
        """Descriptors whose parent is *parent*; ``None`` returns the roots."""
        if isinstance(parent, FrameworkDescriptor):
            parent = parent.key
        return [d for d in self._by_key.values() if d.parent == parent]

    def get(self, key: str) -> FrameworkDescriptor:
        return self._by_key[key]

    def ancestry(self, key: str) -> list[FrameworkDescriptor]:
        """Return the chain from the root down to *key* (inclusive)."""
        chain: list[FrameworkDescriptor] = []
        current: Optional[str] = key
        while current is not None:
            descriptor = self._by_key[current]
            chain.append(descriptor)
            current = descriptor.parent
        chain.reverse()
        return chain

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[FrameworkDescriptor]:
        return iter(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------


def build_registry(descriptors: Iterable[FrameworkDescriptor]) -> DescriptorRegistry:
    """Register *descriptors* in order and validate the resulting forest."""
    registry = DescriptorRegistry()
    for descriptor in descriptors:
        registry.register(descriptor)
    registry.validate()
    return registry


def default_registry(
    disabled: Iterable[str] = (),
    extra: Iterable[FrameworkDescriptor] = (),
) -> DescriptorRegistry:
    """Build the built-in forest, minus *disabled* keys, plus *extra*.

    Disabling a descriptor also drops its descendants, and override entries
    that point at dropped descriptors are removed.
    """
    from fwscout.frameworks import BUILTIN_DESCRIPTORS

    dropped = set(disabled)
    kept: list[FrameworkDescriptor] = []
    for descriptor in BUILTIN_DESCRIPTORS:
        if descriptor.key in dropped or descriptor.parent in dropped:
            dropped.add(descriptor.key)
            continue
        kept.append(descriptor)

    if dropped:
        kept = [_without_overrides(d, dropped) for d in kept]
    return build_registry([*kept, *extra])


def _without_overrides(descriptor: FrameworkDescriptor, dropped: set[str]) -> FrameworkDescriptor:
    if not dropped.intersection(descriptor.overrides):
        return descriptor
    return replace(descriptor, overrides=tuple(o for o in descriptor.overrides if o not in dropped))


def load_import_descriptors(import_string: str) -> list[FrameworkDescriptor]:
    """Load descriptors from ``pkg.module:ATTR``.

    *ATTR* may be a descriptor, an iterable of descriptors, or a callable
    returning either.
    """
    if ":" not in import_string:
        raise ConfigurationError(
            f"Invalid framework import '{import_string}', expected 'pkg.module:ATTR'"
        )
    module_path, attr = import_string.rsplit(":", 1)
    try:
        mod = importlib.import_module(module_path)
        obj = getattr(mod, attr)
    except (ImportError, AttributeError) as exc:
        raise ConfigurationError(f"Cannot load frameworks from '{import_string}': {exc}") from exc

    if callable(obj) and not isinstance(obj, FrameworkDescriptor):
        obj = obj()
    if isinstance(obj, FrameworkDescriptor):
        return [obj]
    try:
        loaded = list(obj)
    except TypeError:
        loaded = []
    if not loaded or not all(isinstance(d, FrameworkDescriptor) for d in loaded):
        raise ConfigurationError(
            f"'{import_string}' does not name framework descriptors"
        )
    return loaded
