"""Report rendering — text and JSON output of a discovery run."""

from __future__ import annotations

import json
from typing import Any

import fwscout
from fwscout.models import MatchRecord, OutcomeStatus, ResolutionOutcome

# ---------------------------------------------------------------------------
# Text output
# ---------------------------------------------------------------------------

_STATUS_COLORS = {
    OutcomeStatus.DETECTED: "\033[92m",  # green
    OutcomeStatus.AMBIGUOUS: "\033[93m",  # yellow
    OutcomeStatus.UNDETECTED: "\033[91m",  # red
}
_RESET = "\033[0m"


def _status_label(status: OutcomeStatus, color: bool = True) -> str:
    label = status.name
    if color:
        return f"{_STATUS_COLORS.get(status, '')}{label}{_RESET}"
    return label


def render_text(outcome: ResolutionOutcome, directory: str, color: bool = True) -> str:
    """Produce human-friendly text output."""
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append("fwscout Discovery Report")
    lines.append("=" * 60)
    lines.append(f"Path:     {directory}")
    lines.append(f"Status:   {_status_label(outcome.status, color)}")

    descriptor = outcome.descriptor
    if descriptor is not None:
        lines.append(f"Framework: {descriptor.name} ({descriptor.key}) at depth {outcome.depth}")
        lines.append(f"Support:  {descriptor.support}")
        if descriptor.support_warning:
            lines.append(f"  ! {descriptor.support_warning}")
    elif outcome.status is OutcomeStatus.AMBIGUOUS:
        lines.append("Multiple conflicting frameworks discovered:")
        for d in outcome.conflicts:
            lines.append(f"  • {d.name} ({d.key})")
    else:
        lines.append("Could not determine the web framework in use.")
    lines.append("")

    if outcome.matches:
        lines.append(f"Matches ({len(outcome.matches)}):")
        for m in outcome.sorted_matches:
            lines.append(f"  [{m.depth}] {m.descriptor.name} ({m.descriptor.key})")
        lines.append("")

    lines.append("=" * 60)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


def _match_to_dict(m: MatchRecord) -> dict[str, Any]:
    return {
        "depth": m.depth,
        "key": m.descriptor.key,
        "name": m.descriptor.name,
        "parent": m.descriptor.parent,
    }


def render_json(outcome: ResolutionOutcome, directory: str) -> str:
    """Produce stable JSON output (deterministic sorting)."""
    descriptor = outcome.descriptor
    doc: dict[str, Any] = {
        "tool": "fwscout",
        "version": fwscout.__version__,
        "path": directory,
        "status": str(outcome.status),
        "framework": None,
        "conflicts": [
            {"key": d.key, "name": d.name} for d in outcome.conflicts
        ],
        "matches": [_match_to_dict(m) for m in outcome.sorted_matches],
    }
    if descriptor is not None:
        doc["framework"] = {
            "key": descriptor.key,
            "name": descriptor.name,
            "depth": outcome.depth,
            "support": str(descriptor.support),
            "type": str(descriptor.type),
        }
    return json.dumps(doc, indent=2, ensure_ascii=False)
