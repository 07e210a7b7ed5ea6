"""Split rendered multi-document YAML into per-template manifests."""

from __future__ import annotations

import re

from chart_viewer.models.chart import Manifest

# A document separator is a line holding only "---" (trailing blanks allowed);
# the first document needs no separator.
_SEPARATOR = re.compile(r"(?:^|\s*\n)---[ \t]*(?=\r?\n|$)")
_SOURCE = re.compile(r"#\s*Source:\s*(\S+)")
_KEY_PREFIX = "manifest-"


def split_manifests(raw: str) -> dict[str, str]:
    """Split a rendered blob into documents keyed ``manifest-<n>``.

    The numeric suffix records the position the renderer emitted the
    document at. Blank documents are dropped without consuming a number.
    """
    result: dict[str, str] = {}
    count = 0
    for doc in _SEPARATOR.split(raw):
        if not doc.strip():
            continue
        result[f"{_KEY_PREFIX}{count}"] = doc.strip()
        count += 1
    return result


def _order(key: str) -> int:
    try:
        return int(key[len(_KEY_PREFIX):])
    except ValueError:
        return 0


def ordered_keys(manifests: dict[str, str]) -> list[str]:
    """Return the keys of a split in renderer order."""
    return sorted(manifests, key=_order)


def source_path(document: str) -> str | None:
    """Return the path a ``# Source:`` marker points at, if any."""
    match = _SOURCE.search(document)
    if not match:
        return None
    return match.group(1)


def strip_chart_root(path: str) -> str:
    """Drop the leading chart directory from a source path."""
    parts = [p for p in path.split("/") if p]
    return "/".join(parts[1:])


def is_test_manifest(path: str) -> bool:
    """True for paths in the chart's ``tests`` directory.

    ``path`` is relative to the chart root; helm puts test hooks under
    ``templates/tests``, older charts under a top-level ``tests``.
    """
    parts = path.split("/")
    if parts[0] == "tests":
        return True
    return len(parts) > 1 and parts[0] == "templates" and parts[1] == "tests"


def post_process(raw: str) -> list[Manifest]:
    """Turn raw renderer output into addressable manifests in renderer order."""
    documents = split_manifests(raw)
    manifests: list[Manifest] = []
    for key in ordered_keys(documents):
        document = documents[key]
        source = source_path(document)
        if source is None:
            continue
        name = strip_chart_root(source)
        if not name or is_test_manifest(name):
            continue
        manifests.append(Manifest(name=name, content=document))
    return manifests


def join_manifests(manifests: list[Manifest]) -> str:
    """Concatenate manifests back into one multi-document string."""
    return "".join(f"---\n{m.content}\n" for m in manifests)
