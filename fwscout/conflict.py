"""Conflict resolver — pick one winner from the accumulated matches.

The deepest layer wins outright; ties inside that layer can only be broken
by explicit ``overrides``.  Shallower matches are never offered as a
fallback, even when the deepest layer is ambiguous.
"""

from __future__ import annotations

from typing import Iterable

from fwscout.models import MatchRecord, OutcomeStatus, ResolutionOutcome


def select(matches: Iterable[MatchRecord]) -> ResolutionOutcome:
    records = frozenset(matches)
    if not records:
        return ResolutionOutcome(status=OutcomeStatus.UNDETECTED)

    max_depth = max(m.depth for m in records)
    candidates = sorted(
        (m for m in records if m.depth == max_depth),
        key=lambda m: m.descriptor.key,
    )
    overridden = {key for m in candidates for key in m.descriptor.overrides}
    finalists = [m for m in candidates if m.descriptor.key not in overridden]

    if len(finalists) == 1:
        return ResolutionOutcome(
            status=OutcomeStatus.DETECTED,
            match=finalists[0],
            matches=records,
        )
    # Every candidate overriding every other also lands here, with no
    # finalists left to report.
    return ResolutionOutcome(
        status=OutcomeStatus.AMBIGUOUS if finalists else OutcomeStatus.UNDETECTED,
        conflicts=tuple(m.descriptor for m in finalists),
        matches=records,
    )
