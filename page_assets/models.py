"""Data models produced by asset extraction and verification."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class ImageAsset:
    """Image reference discovered in a page, resolved to an absolute URL."""

    url: str
    alt_text: str = ""


@dataclass(frozen=True)
class ImageProbeResult:
    """Verified image record; a status code of 0 marks a failed probe."""

    url: str
    alt_text: str
    size_kb: int
    content_type: str
    status_code: int

    @classmethod
    def failed_probe(cls, asset: ImageAsset) -> "ImageProbeResult":
        return cls(
            url=asset.url,
            alt_text=asset.alt_text,
            size_kb=0,
            content_type="",
            status_code=0,
        )

    @property
    def failed(self) -> bool:
        return self.status_code == 0

    def as_tuple(self) -> Tuple[str, str, int, str, int]:
        return (
            self.url,
            self.alt_text,
            self.size_kb,
            self.content_type,
            self.status_code,
        )

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass
class PdfLinkSet:
    """Absolute PDF links found in a page, in document order."""

    links: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.links)

    def __iter__(self):
        return iter(self.links)

    def to_dict(self) -> Dict[str, List[str]]:
        return {"pdf_links": list(self.links)}
