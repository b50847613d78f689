"""Bounded reset history with point-in-time snapshots."""

import copy
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import BaseModel

from backend.travel_buddy.models.reset import ResetHistoryEntry, ResetType

DEFAULT_HISTORY_LIMIT = 10


def format_timestamp(moment: datetime) -> str:
    """Render a UTC instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ResetRecord:
    """One reset call and the itinerary as it was just before it.

    ``partial_reset_options`` holds the options as the caller supplied them,
    before any validation.
    """

    timestamp: str
    snapshot: dict[str, Any] | None
    reset_type: Any
    partial_reset_options: Any = None

    def to_entry(self) -> ResetHistoryEntry:
        """Metadata view without the snapshot."""
        options = self.partial_reset_options
        if isinstance(options, BaseModel):
            options = options.model_dump(mode="json", by_alias=True, exclude_unset=True)
        return ResetHistoryEntry(
            timestamp=self.timestamp,
            reset_type=self.reset_type,
            partial_reset_options=options,
        )


class ResetHistory:
    """FIFO of ResetRecords capped at ``limit`` entries.

    Timestamps double as record identifiers, so they are kept strictly
    increasing: a reset landing in the same millisecond as the previous one
    is stamped one millisecond later.

    Not locked on its own; the reset engine only touches it while holding
    the itinerary store lock.
    """

    def __init__(
        self,
        limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self._records: deque[ResetRecord] = deque(maxlen=limit)
        self._clock = clock
        self._last_moment: datetime | None = None

    @property
    def limit(self) -> int:
        return self._records.maxlen or DEFAULT_HISTORY_LIMIT

    def __len__(self) -> int:
        return len(self._records)

    def _next_timestamp(self) -> str:
        moment = self._clock().astimezone(timezone.utc)
        moment = moment.replace(microsecond=moment.microsecond // 1000 * 1000)
        if self._last_moment is not None and moment <= self._last_moment:
            moment = self._last_moment + timedelta(milliseconds=1)
        self._last_moment = moment
        return format_timestamp(moment)

    def record(
        self,
        snapshot: dict[str, Any] | None,
        reset_type: Any,
        partial_reset_options: Any = None,
    ) -> ResetRecord:
        """Append a record for a reset call, evicting the oldest past the limit.

        Options are only kept for partial resets.
        """
        record = ResetRecord(
            timestamp=self._next_timestamp(),
            snapshot=snapshot,
            reset_type=reset_type,
            partial_reset_options=(
                copy.deepcopy(partial_reset_options) if reset_type == ResetType.partial else None
            ),
        )
        self._records.append(record)
        return record

    def find(self, timestamp: Any) -> ResetRecord | None:
        """Exact-match lookup by timestamp."""
        for record in self._records:
            if record.timestamp == timestamp:
                return record
        return None

    def entries(self) -> list[ResetRecord]:
        """Records oldest first."""
        return list(self._records)
