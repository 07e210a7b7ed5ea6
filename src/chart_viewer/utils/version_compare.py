"""Semver comparison utilities."""

from __future__ import annotations

from packaging.version import InvalidVersion, Version


def parse_version(v: str) -> Version | None:
    """Parse a version string, returning None on failure."""
    try:
        return Version(v)
    except InvalidVersion:
        # Try stripping leading 'v'
        if v.startswith("v"):
            try:
                return Version(v[1:])
            except InvalidVersion:
                pass
    return None


def is_newer(current: str, candidate: str) -> bool:
    """Return True if candidate is newer than current."""
    cur = parse_version(current)
    cand = parse_version(candidate)
    if cur is None or cand is None:
        return False
    return cand > cur


def latest_version(versions: list[str]) -> str:
    """Return the highest parseable version, or the first listed one.

    Versions that do not parse never win over ones that do; the listing
    order breaks the tie when nothing parses.
    """
    if not versions:
        return ""
    best = versions[0]
    for v in versions[1:]:
        if parse_version(best) is None and parse_version(v) is not None:
            best = v
        elif is_newer(best, v):
            best = v
    return best
