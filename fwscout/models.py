"""Data models used throughout fwscout."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from fwscout.errors import BuildError

if TYPE_CHECKING:
    from fwscout.adapters.base import BuildOptions, FrameworkAdapter

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class SupportLevel(enum.Enum):
    """How well an integration is supported.  Informational only."""

    EXPERIMENTAL = "experimental"
    COMMUNITY = "community-supported"

    @classmethod
    def from_str(cls, label: str) -> SupportLevel:
        for member in cls:
            if label.lower() in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown support level '{label}'")

    def __str__(self) -> str:
        return self.value


SUPPORT_LEVEL_WARNINGS = {
    SupportLevel.EXPERIMENTAL: "This is an experimental integration, proceed with caution.",
    SupportLevel.COMMUNITY: "This is a community-supported integration, support is best effort.",
}


class FrameworkType(enum.IntEnum):
    """Broad category of a framework.  Does not affect resolution."""

    CUSTOM = 0  # express
    MONOREPO = 1  # nx, lerna
    META_FRAMEWORK = 2  # next.js, nuxt
    FRAMEWORK = 3  # angular, react
    TOOLCHAIN = 4  # vite

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")


class OutcomeStatus(enum.Enum):
    DETECTED = "detected"
    UNDETECTED = "undetected"
    AMBIGUOUS = "ambiguous"

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DependencyConstraint:
    """An installed package that a descriptor requires.

    ``search_depth`` of ``None`` searches the whole installed tree.
    ``version_range`` uses npm range syntax (``^1.2.0``, ``>=2 <4``, ...).
    """

    name: str
    version_range: Optional[str] = None
    search_depth: Optional[int] = 0
    include_dev: bool = True


@dataclass(frozen=True)
class FrameworkDescriptor:
    """Static description of one web framework and how to recognise it."""

    key: str
    name: str
    support: SupportLevel = SupportLevel.EXPERIMENTAL
    type: FrameworkType = FrameworkType.FRAMEWORK
    parent: Optional[str] = None
    required_files: tuple[str, ...] = ()
    dependencies: tuple[DependencyConstraint, ...] = ()
    capability_probes: tuple[str, ...] = ()
    toolchain: Optional[str] = None
    overrides: tuple[str, ...] = ()
    initializer: Optional[Callable[[str, BuildOptions], FrameworkAdapter]] = field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        # Accept lists from callers and YAML-ish literals; store tuples.
        object.__setattr__(self, "required_files", tuple(self.required_files))
        object.__setattr__(self, "dependencies", _as_constraints(self.dependencies))
        object.__setattr__(self, "capability_probes", tuple(self.capability_probes))
        object.__setattr__(self, "overrides", tuple(self.overrides))

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def support_warning(self) -> str:
        return SUPPORT_LEVEL_WARNINGS.get(self.support, "")

    def web_framework_id(self, wants_backend: bool) -> str:
        """Return the identifier recorded for a deployed site."""
        return f"{self.key}_ssr" if wants_backend else self.key

    def initialize(self, directory: str, options: BuildOptions | None = None) -> FrameworkAdapter:
        """Construct the build adapter for *directory*."""
        if self.initializer is None:
            raise BuildError(f"Framework '{self.key}' has no build adapter")
        if options is None:
            from fwscout.adapters.base import BuildOptions

            options = BuildOptions()
        return self.initializer(directory, options)


def _as_constraints(
    deps: Iterable[DependencyConstraint | str],
) -> tuple[DependencyConstraint, ...]:
    """Bare package names become constraints with default options."""
    return tuple(
        DependencyConstraint(name=d) if isinstance(d, str) else d for d in deps
    )


# ---------------------------------------------------------------------------
# Resolution results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MatchRecord:
    """One descriptor that matched, and the layer it matched at."""

    depth: int
    descriptor: FrameworkDescriptor

    def sort_key(self) -> tuple:
        return (self.depth, self.descriptor.key)


@dataclass(frozen=True)
class ResolutionOutcome:
    """Result of one top-level discovery call."""

    status: OutcomeStatus
    match: Optional[MatchRecord] = None
    conflicts: tuple[FrameworkDescriptor, ...] = ()
    matches: frozenset[MatchRecord] = frozenset()

    @property
    def detected(self) -> bool:
        return self.status is OutcomeStatus.DETECTED

    @property
    def descriptor(self) -> FrameworkDescriptor | None:
        return self.match.descriptor if self.match else None

    @property
    def depth(self) -> int | None:
        return self.match.depth if self.match else None

    @property
    def sorted_matches(self) -> list[MatchRecord]:
        return sorted(self.matches, key=lambda m: m.sort_key())
