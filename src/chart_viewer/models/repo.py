"""Repository and chart listing models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Repo:
    name: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Repo:
        return cls(
            name=d.get("name", ""),
            url=d.get("url", ""),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "url": self.url}


@dataclass
class Chart:
    name: str = ""
    versions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> Chart:
        return cls(
            name=d.get("name", ""),
            versions=[str(v) for v in d.get("versions") or []],
        )

    @classmethod
    def from_index_entries(cls, name: str, entries: list[dict]) -> Chart:
        """Build a chart from its index entries, keeping index order."""
        return cls(
            name=name,
            versions=[str(e["version"]) for e in entries if e.get("version")],
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "versions": list(self.versions)}
