from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class TableDocument:
    """Decoded snapshot of a stored table.

    Fields:
        header_row: Header cells, index = column position.
        rows: Ordered rows of cells. Rectangular shape is the caller's job.
        updated_at: ISO-8601 timestamp written at save time.
    """

    header_row: List[Any] = field(default_factory=list)
    rows: List[List[Any]] = field(default_factory=list)
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headerRow": list(self.header_row),
            "tableData": [list(row) for row in self.rows],
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class ImageReference:
    src: str
    alt: str

    def to_dict(self) -> Dict[str, str]:
        return {"src": self.src, "alt": self.alt}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ImageReference":
        return cls(src=data["src"], alt=data["alt"])


@dataclass
class MediaFile:
    """An image waiting to be uploaded to the media host."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)
