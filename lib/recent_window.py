# =============================================================================
# lib/recent_window.py - Bounded Recent-Measurement Window
# =============================================================================
# Each user row carries a denormalized list of its most recent body
# measurement summaries so the trend view never scans the full history.
#
# Invariants:
# - at most `capacity` entries (30 by default)
# - entries sorted ascending by date
# - on overflow the oldest-by-date entries are evicted
# - ids are local to the window: max(existing id) + 1, starting at 1
#
# The window is read, modified and written back as a whole. Two concurrent
# writers for the same user race; the last write wins.
# =============================================================================

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

DEFAULT_CAPACITY = 30


def as_utc(value: datetime | str) -> datetime:
    """Aware UTC datetime; naive values and ISO strings without offset count as UTC."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class RecentMeasurement:
    """One summary entry: local id, date, weight and body fat."""

    id: int
    date: datetime
    weight_kg: float
    body_fat_percentage: float

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> RecentMeasurement:
        return cls(
            id=int(row["id"]),
            date=as_utc(row["date"]),
            weight_kg=float(row["weightKg"]),
            body_fat_percentage=float(row["bodyFatPercentage"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "weightKg": self.weight_kg,
            "bodyFatPercentage": self.body_fat_percentage,
        }


class RecentMeasurementWindow:
    """
    Sorted, capacity-bounded list of RecentMeasurement entries.

    Example:
        window = RecentMeasurementWindow.from_json(user.recent_body_measurements)
        window.append(measured_at, 72.4, 18.1)
        user.recent_body_measurements = window.to_json()
    """

    def __init__(
        self,
        entries: Iterable[RecentMeasurement] = (),
        capacity: int = DEFAULT_CAPACITY,
    ):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: list[RecentMeasurement] = []
        for entry in entries:
            self._entries.append(entry)
        self._normalize()

    @classmethod
    def from_json(
        cls,
        rows: Iterable[dict[str, Any]] | None,
        capacity: int = DEFAULT_CAPACITY,
    ) -> RecentMeasurementWindow:
        return cls((RecentMeasurement.from_dict(row) for row in rows or ()), capacity=capacity)

    @property
    def entries(self) -> list[RecentMeasurement]:
        return list(self._entries)

    def next_id(self) -> int:
        return max((entry.id for entry in self._entries), default=0) + 1

    def append(
        self,
        date: datetime | str,
        weight_kg: float,
        body_fat_percentage: float,
    ) -> RecentMeasurement:
        """
        Add a summary, re-sort by date and evict the oldest beyond capacity.

        Returns the new entry (it may already have been evicted if it is
        older than every entry of a full window).
        """
        entry = RecentMeasurement(
            id=self.next_id(),
            date=as_utc(date),
            weight_kg=float(weight_kg),
            body_fat_percentage=float(body_fat_percentage),
        )
        self._entries.append(entry)
        self._normalize()
        return entry

    def _normalize(self) -> None:
        # Stable sort keeps insertion order for equal dates
        self._entries.sort(key=lambda entry: entry.date)
        if len(self._entries) > self.capacity:
            del self._entries[: len(self._entries) - self.capacity]

    def to_json(self) -> list[dict[str, Any]]:
        return [entry.to_dict() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RecentMeasurement]:
        return iter(self._entries)
