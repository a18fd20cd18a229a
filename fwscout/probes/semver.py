"""npm-style semantic versions and ranges.

Supported range grammar (the subset package.json authors actually write)::

    range     ::= set ( '||' set )*
    set       ::= hyphen | comparator ( ' ' comparator )*
    hyphen    ::= partial ' - ' partial
    comparator::= ( '<' | '<=' | '>' | '>=' | '=' | '~' | '^' )? partial
    partial   ::= ( 'v' )? xr ( '.' xr ( '.' xr ( '-' pre )? )? )?
    xr        ::= 'x' | 'X' | '*' | number

Versions are ordered by SemVer 2.0 precedence: prerelease identifiers are
compared one by one, numbers numerically, text lexically, numbers before
text, and a shorter identifier list before a longer one it prefixes.

Prerelease versions only satisfy a set when one of its comparators names a
prerelease on the same ``major.minor.patch``, as npm does.
"""

from __future__ import annotations

import operator
import re
from typing import Callable, Optional

_PARTIAL_RE = re.compile(
    r"^v?(?P<major>\d+|[xX*])"
    r"(?:\.(?P<minor>\d+|[xX*])"
    r"(?:\.(?P<patch>\d+|[xX*])"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?)?)?$"
)
_COMPARATOR_RE = re.compile(r"^(?P<op><=|>=|<|>|=|~>|~|\^)?\s*(?P<ver>.*)$")
_HYPHEN_RE = re.compile(r"^(?P<low>\S+)\s+-\s+(?P<high>\S+)$")
_WILDCARDS = {"x", "X", "*"}


class InvalidVersion(ValueError):
    """Raised for a version string that is not ``major.minor.patch[-pre][+build]``."""


class InvalidRange(ValueError):
    """Raised for a range string that cannot be parsed."""


# ---------------------------------------------------------------------------
# Versions
# ---------------------------------------------------------------------------


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


class SemVer:
    """A parsed version.  Build metadata is dropped; it has no precedence."""

    __slots__ = ("major", "minor", "patch", "prerelease", "_key")

    def __init__(self, major: int, minor: int, patch: int, prerelease: tuple[str, ...] = ()) -> None:
        self.major = major
        self.minor = minor
        self.patch = patch
        self.prerelease = tuple(prerelease)
        # A release sorts above every prerelease of the same major.minor.patch.
        self._key = (
            (major, minor, patch),
            0 if self.prerelease else 1,
            tuple(_identifier_key(i) for i in self.prerelease),
        )

    @property
    def release(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: SemVer) -> bool:
        return self._key < other._key

    def __le__(self, other: SemVer) -> bool:
        return self._key <= other._key

    def __gt__(self, other: SemVer) -> bool:
        return self._key > other._key

    def __ge__(self, other: SemVer) -> bool:
        return self._key >= other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        return f"{text}-{'.'.join(self.prerelease)}" if self.prerelease else text

    def __repr__(self) -> str:
        return f"SemVer('{self}')"


Comparator = tuple[str, SemVer]

_OPS: dict[str, Callable[[SemVer, SemVer], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "=": operator.eq,
}


def _split_pre(pre: Optional[str]) -> tuple[str, ...]:
    if not pre:
        return ()
    parts = tuple(pre.split("."))
    if any(not p for p in parts):
        raise InvalidVersion(f"Empty prerelease identifier in '{pre}'")
    return parts


def parse_version(text: str) -> SemVer:
    """Parse an installed npm version such as ``13.0.1-canary.4``."""
    cleaned = text.strip().lstrip("=v")
    m = _PARTIAL_RE.match(cleaned)
    if not m or not m.group("patch") or {m.group("major"), m.group("minor"), m.group("patch")} & _WILDCARDS:
        raise InvalidVersion(f"Invalid version: '{text}'")
    return SemVer(
        int(m.group("major")),
        int(m.group("minor")),
        int(m.group("patch")),
        _split_pre(m.group("pre")),
    )


# ---------------------------------------------------------------------------
# Range parsing
# ---------------------------------------------------------------------------


def _split_partial(text: str) -> tuple[Optional[int], Optional[int], Optional[int], Optional[str]]:
    m = _PARTIAL_RE.match(text)
    if not m:
        raise InvalidRange(f"Invalid version in range: '{text}'")

    def num(group: str) -> Optional[int]:
        val = m.group(group)
        if val is None or val in _WILDCARDS:
            return None
        return int(val)

    major, minor, patch = num("major"), num("minor"), num("patch")
    if major is None:
        minor = patch = None
    elif minor is None:
        patch = None
    return major, minor, patch, m.group("pre")


def _v(major: int, minor: int, patch: int, pre: Optional[str] = None) -> SemVer:
    try:
        return SemVer(major, minor, patch, _split_pre(pre))
    except InvalidVersion as exc:
        raise InvalidRange(str(exc)) from exc


def _floor(major: int, minor: int, patch: int) -> SemVer:
    """Lowest version of a release line, prereleases included (npm's ``-0``)."""
    return SemVer(major, minor, patch, ("0",))


def _expand(op: str, text: str) -> list[Comparator]:
    major, minor, patch, pre = _split_partial(text)

    if major is None:
        return [] if op in ("", "=", ">=", "<=", "~", "~>", "^") else [("<", _floor(0, 0, 0))]

    if op == "^":
        lo = _v(major, minor or 0, patch or 0, pre)
        if major > 0 or minor is None:
            hi = _floor(major + 1, 0, 0)
        elif minor > 0 or patch is None:
            hi = _floor(0, minor + 1, 0)
        else:
            hi = _floor(0, 0, patch + 1)
        return [(">=", lo), ("<", hi)]

    if op in ("~", "~>"):
        lo = _v(major, minor or 0, patch or 0, pre)
        hi = _floor(major + 1, 0, 0) if minor is None else _floor(major, minor + 1, 0)
        return [(">=", lo), ("<", hi)]

    if minor is None or patch is None:
        # x-range: 1.x, 1.2.*, 1, 1.2
        lo = _v(major, minor or 0, 0)
        nxt = (major + 1, 0, 0) if minor is None else (major, minor + 1, 0)
        if op in ("", "="):
            return [(">=", lo), ("<", _floor(*nxt))]
        if op == ">":
            return [(">=", _v(*nxt))]
        if op == ">=":
            return [(">=", lo)]
        if op == "<":
            return [("<", _floor(*lo.release))]
        return [("<", _floor(*nxt))]  # <=

    return [(op or "=", _v(major, minor, patch, pre))]


def _parse_set(text: str) -> list[Comparator]:
    text = text.strip()
    hyphen = _HYPHEN_RE.match(text)
    if hyphen:
        low = _expand(">=", hyphen.group("low"))
        return low + _expand("<=", hyphen.group("high"))

    # "> = 1.2" style spacing is collapsed before splitting.
    tokens = re.sub(r"(<=|>=|<|>|=|~>|~|\^)\s+", r"\1", text).split()
    comparators: list[Comparator] = []
    for token in tokens:
        m = _COMPARATOR_RE.match(token)
        if not m:
            raise InvalidRange(f"Invalid comparator: '{token}'")
        comparators.extend(_expand(m.group("op") or "", m.group("ver")))
    return comparators


def parse_range(text: str) -> list[list[Comparator]]:
    """Parse *text* into a list of comparator sets (OR of ANDs)."""
    if not text.strip():
        return [[]]
    return [_parse_set(part) for part in text.split("||")]


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


def _set_allows_prerelease(comparators: list[Comparator], version: SemVer) -> bool:
    for _op, bound in comparators:
        if bound.is_prerelease and bound.release == version.release:
            return True
    return False


def satisfies(version: str | SemVer, range_text: str) -> bool:
    """Return ``True`` if *version* is inside the npm range *range_text*.

    Unparseable versions never satisfy; unparseable ranges raise
    :class:`InvalidRange`.
    """
    if isinstance(version, str):
        try:
            version = parse_version(version)
        except InvalidVersion:
            return False

    for comparators in parse_range(range_text):
        if not all(_OPS[op](version, bound) for op, bound in comparators):
            continue
        if version.is_prerelease and not _set_allows_prerelease(comparators, version):
            continue
        return True
    return False
