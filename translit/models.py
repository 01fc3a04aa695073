"""Data models for the transliterator."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any


class Language(str, Enum):
    """Supported languages, valued by their CLI / file-name codes."""

    ENGLISH = "en"
    SINHALA = "si"
    TAMIL = "ta"


class Gender(int, Enum):
    """Gender hint, valued by the gender code used in rule files."""

    UNSPECIFIED = 0
    MALE = 1
    FEMALE = 2


class TableKind(str, Enum):
    """Kind of a flat table file."""

    ENCODE_RULES = "encode_rules"  # rules-<lang>.txt
    DECODE_RULES = "decode_rules"  # phonetic-<lang>.txt
    DICTIONARY = "dictionary"  # <a>-to-<b>.txt


@dataclass
class RejectedRecord:
    """A malformed table record dropped by the loader."""

    path: Path
    line_no: int
    line: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path.name}:{self.line_no}: {self.reason} ({self.line!r})"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": str(self.path),
            "line_no": self.line_no,
            "line": self.line,
            "reason": self.reason,
        }


@dataclass
class TableArtifact:
    """A table file listed in a manifest."""

    path: str
    kind: TableKind
    hash: str
    size_bytes: int
    record_count: int
    rejected_count: int = 0


@dataclass
class TableManifest:
    """Manifest of a table directory with checksums."""

    data_dir: str
    version: int
    created_at: str
    artifacts: list[TableArtifact]
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "data_dir": self.data_dir,
            "version": self.version,
            "created_at": self.created_at,
            "artifacts": [
                {
                    "path": a.path,
                    "kind": a.kind.value,
                    "hash": a.hash,
                    "size_bytes": a.size_bytes,
                    "record_count": a.record_count,
                    "rejected_count": a.rejected_count,
                }
                for a in self.artifacts
            ],
            "metadata": self.metadata,
        }


def create_timestamp() -> str:
    """Create ISO 8601 timestamp."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
