"""Player-count samples and the server snapshot that feeds one graph card."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

__all__ = [
    "Sample",
    "SeriesInput",
    "ServerSnapshot",
    "samples_from_records",
    "snapshot_from_mapping",
    "load_snapshot",
]

# 0001-01-01T00:00:00Z .. 9999-12-31T23:59:59.999Z, the datetime range
MIN_TIMESTAMP_MS = -62_135_596_800_000
MAX_TIMESTAMP_MS = 253_402_300_799_999


@dataclass(frozen=True, slots=True)
class Sample:
    """One observed player count at an epoch timestamp (milliseconds)."""

    count: int
    timestamp_ms: int


@dataclass(frozen=True, slots=True)
class SeriesInput:
    samples: tuple[Sample, ...] = ()
    capacity_hint: int = 0
    observed_peak: int = 0


@dataclass(frozen=True, slots=True)
class ServerSnapshot:
    """Everything a server card displays.

    ``capacity`` is the slot count used to scale the chart, ``peak_24h`` is
    the longer-window maximum that drives the peak marker, and
    ``all_time_peak`` is shown only in the stats row.
    """

    name: str
    address: str = ""
    image: Path | None = None
    current_players: int = 0
    capacity: int = 0
    peak_24h: int = 0
    all_time_peak: int = 0
    samples: tuple[Sample, ...] = field(default_factory=tuple)

    @property
    def series(self) -> SeriesInput:
        return SeriesInput(self.samples, self.capacity, self.peak_24h)


def _non_negative_int(value: Any, what: str) -> int:
    # bool is an int subclass; a JSON true/false count is a data error
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{what} must be non-negative, got {value}")
    return value


def samples_from_records(records: Sequence[Mapping[str, Any]]) -> tuple[Sample, ...]:
    """Convert ``{"count": int, "timestamp": int}`` records into samples.

    Order is preserved; callers supply samples oldest first.
    """

    out: list[Sample] = []
    for idx, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ValueError(f"samples[{idx}] must be an object")
        if "count" not in record or "timestamp" not in record:
            raise ValueError(f"samples[{idx}] requires 'count' and 'timestamp'")
        count = _non_negative_int(record["count"], f"samples[{idx}].count")
        stamp = record["timestamp"]
        if isinstance(stamp, bool) or not isinstance(stamp, int):
            raise ValueError(f"samples[{idx}].timestamp must be an integer, got {stamp!r}")
        if not MIN_TIMESTAMP_MS <= stamp <= MAX_TIMESTAMP_MS:
            raise ValueError(f"samples[{idx}].timestamp is out of range: {stamp}")
        out.append(Sample(count, stamp))
    return tuple(out)


def snapshot_from_mapping(data: Mapping[str, Any], *, base_dir: Path | None = None) -> ServerSnapshot:
    if not isinstance(data, Mapping):
        raise ValueError("snapshot must be a JSON object")
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise ValueError("snapshot requires a non-empty 'name'")
    address = data.get("address", "")
    if not isinstance(address, str):
        raise ValueError("'address' must be a string")

    image: Path | None = None
    image_raw = data.get("image")
    if image_raw:
        image = Path(str(image_raw))
        if base_dir is not None and not image.is_absolute():
            image = base_dir / image

    records = data.get("samples", [])
    if not isinstance(records, list):
        raise ValueError("'samples' must be a list")

    return ServerSnapshot(
        name=name,
        address=address,
        image=image,
        current_players=_non_negative_int(data.get("current_players", 0), "current_players"),
        capacity=_non_negative_int(data.get("capacity", 0), "capacity"),
        peak_24h=_non_negative_int(data.get("peak_24h", 0), "peak_24h"),
        all_time_peak=_non_negative_int(data.get("all_time_peak", 0), "all_time_peak"),
        samples=samples_from_records(records),
    )


def load_snapshot(path: str | Path) -> ServerSnapshot:
    """Read a snapshot JSON file; relative image paths resolve next to it."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path}: invalid JSON ({exc})") from exc
    return snapshot_from_mapping(data, base_dir=path.parent)
