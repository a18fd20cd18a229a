"""Exception hierarchy.

Only :class:`ConfigurationError` is meant to cross the discovery boundary.
Ambiguous or missing detections are reported as
:class:`~fwscout.models.ResolutionOutcome` values, and :class:`ProbeFailure`
is recovered inside the evaluator.
"""

from __future__ import annotations


class FwscoutError(Exception):
    """Base class for all fwscout errors."""


class ConfigurationError(FwscoutError):
    """Malformed descriptor forest or configuration (fatal at startup)."""


class ProbeFailure(FwscoutError):
    """A predicate probe could not complete (missing tool, bad output)."""


class BuildError(FwscoutError):
    """A framework adapter failed to build or stage its output."""
