"""Assemble, sort and write the JSON manifest."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from .exceptions import EmptyResultError
from .models import ProblemRecord


def _now_iso() -> str:
    """UTC timestamp like 2024-01-31T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Manifest:
    records: list[ProblemRecord]
    mode: str = "content"
    records_key: str = "problems"
    generated: str = field(default_factory=_now_iso)

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def platforms(self) -> list[str]:
        return sorted({r.platform for r in self.records})

    def to_dict(self) -> dict:
        return {
            "generated": self.generated,
            "count": self.count,
            self.records_key: [r.to_dict(self.mode) for r in self.records],
        }


def sort_records(records: list[ProblemRecord], sort_by: str = "platform") -> list[ProblemRecord]:
    """Sort by platform then title, or by title alone."""
    if sort_by == "platform":
        return sorted(records, key=lambda r: (r.platform, r.title))
    if sort_by == "title":
        return sorted(records, key=lambda r: r.title)
    raise ValueError(f"Unknown sort key: {sort_by}")


def build_manifest(
    records: list[ProblemRecord],
    mode: str = "content",
    sort_by: str = "platform",
    records_key: str = "problems",
) -> Manifest:
    """Sorted manifest of records; an empty run is an error, not an empty file."""
    if not records:
        raise EmptyResultError("No SQL questions found")
    return Manifest(records=sort_records(records, sort_by), mode=mode, records_key=records_key)


def write_manifest(manifest: Manifest, path: Path) -> int:
    """Write manifest as pretty-printed JSON, replacing any existing file.

    Returns the number of bytes written.
    """
    data = json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False).encode("utf-8")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return len(data)
