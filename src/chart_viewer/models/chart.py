"""Chart content and rendered manifest models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Template:
    """One source template file; ``name`` is relative to the chart root."""

    name: str = ""
    content: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Template:
        return cls(
            name=d.get("name", ""),
            content=d.get("content", ""),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "content": self.content}


@dataclass
class Manifest:
    """One rendered document, named after the template it came from."""

    name: str = ""
    content: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Manifest:
        return cls(
            name=d.get("name", ""),
            content=d.get("content", ""),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "content": self.content}


@dataclass
class ManifestResponse:
    url: str = ""
    manifests: list[Manifest] = field(default_factory=list)

    @property
    def hash(self) -> str:
        """The content hash the retrieval URL ends with."""
        return self.url.rsplit("/", 1)[-1]

    @classmethod
    def from_dict(cls, d: dict) -> ManifestResponse:
        return cls(
            url=d.get("url", ""),
            manifests=[Manifest.from_dict(m) for m in d.get("manifests") or []],
        )

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "manifests": [m.to_dict() for m in self.manifests],
        }


@dataclass
class ChartDetail:
    values: dict[str, Any] = field(default_factory=dict)
    templates: list[Template] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "values": self.values,
            "templates": [t.to_dict() for t in self.templates],
        }
