"""Itinerary reset engine - complete/partial resets, history and restore.

Every reset call is recorded in history before its options are checked, so
rejected resets leave a record too. Restoring never edits history; records
only leave it through FIFO eviction.
"""

import copy
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from backend.travel_buddy.errors import (
    BackupNotFoundError,
    InvalidResetOptionsError,
    NoItineraryError,
    PurgeError,
)
from backend.travel_buddy.models.reset import PartialResetOptions, ResetHistoryEntry, ResetType
from backend.travel_buddy.store.documents import DocumentStore
from backend.travel_buddy.store.history import ResetHistory, ResetRecord
from backend.travel_buddy.store.itinerary_store import ItineraryStore
from backend.travel_buddy.utils.logging import StructuredStoreLogger
from backend.travel_buddy.utils.metrics import PrometheusStoreMetrics


@dataclass
class ResetOutcome:
    """Result of a reset whose state mutation has committed.

    ``cleanup_error`` is set when the itinerary was cleared but deleting
    uploaded documents failed afterwards.
    """

    itinerary: dict[str, Any] | None
    message: str
    record: ResetRecord
    files_purged: int = 0
    cleanup_error: PurgeError | None = None

    @property
    def warnings(self) -> list[str]:
        if self.cleanup_error is None:
            return []
        return [f"Uploaded documents could not be purged: {self.cleanup_error.message}"]


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def parse_instant(value: Any) -> datetime | None:
    """Parse an ISO-8601 value into an aware datetime (naive means UTC).

    Returns None for missing or unparseable values.
    """
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str):
        return None
    try:
        return _as_utc(datetime.fromisoformat(value))
    except ValueError:
        return None


def _field(activity: Any, name: str) -> Any:
    if isinstance(activity, dict):
        return activity.get(name)
    return None


def _count_activities(itinerary: dict[str, Any] | None) -> int | None:
    if itinerary is None:
        return None
    activities = itinerary.get("activities")
    return len(activities) if isinstance(activities, list) else None


def coerce_options(raw: Any) -> PartialResetOptions | None:
    """Validate caller-supplied partial reset options.

    Absent or falsy scalar values (null, false, 0, "") mean no options were
    given. An object is validated as PartialResetOptions.

    Raises:
        InvalidResetOptionsError: Options of the wrong shape
    """
    if isinstance(raw, PartialResetOptions):
        return raw
    if raw is None or raw is False or raw in (0, ""):
        return None
    if not isinstance(raw, dict):
        raise InvalidResetOptionsError()
    try:
        return PartialResetOptions.model_validate(raw)
    except ValidationError as e:
        raise InvalidResetOptionsError() from e


def filter_activities(itinerary: dict[str, Any], options: PartialResetOptions) -> dict[str, Any]:
    """Return a copy of ``itinerary`` without the activities ``options`` select.

    Type filter runs first, then the date filter on what is left. The date
    window removes inclusively: an activity survives only if it is strictly
    before ``start`` or strictly after ``end``. An activity without a
    parseable ``dateTime`` is neither, so it is removed.
    """
    updated = copy.deepcopy(itinerary)
    activities = updated.get("activities")
    if not isinstance(activities, list):
        return updated

    if options.activity_types:
        activities = [
            activity
            for activity in activities
            if _field(activity, "type") not in options.activity_types
        ]

    date_range = options.date_range
    if date_range is not None and date_range.start is not None and date_range.end is not None:
        start = _as_utc(date_range.start)
        end = _as_utc(date_range.end)

        def keep(activity: Any) -> bool:
            moment = parse_instant(_field(activity, "dateTime"))
            if moment is None:
                return False
            return moment < start or moment > end

        activities = [activity for activity in activities if keep(activity)]

    updated["activities"] = activities
    return updated


class ItineraryResetService:
    """Resets, history and restore over a shared ItineraryStore."""

    def __init__(
        self,
        store: ItineraryStore,
        history: ResetHistory,
        documents: DocumentStore,
        *,
        structured_logger: StructuredStoreLogger | None = None,
        metrics: PrometheusStoreMetrics | None = None,
    ) -> None:
        self._store = store
        self._history = history
        self._documents = documents
        self._log = structured_logger or StructuredStoreLogger()
        self._metrics = metrics or PrometheusStoreMetrics()

    def reset_itinerary(
        self,
        reset_type: Any,
        preserve_documents: Any = False,
        partial_reset_options: Any = None,
    ) -> ResetOutcome:
        """Reset the current itinerary completely or partially.

        Args:
            reset_type: "complete" or "partial"; anything else is rejected
            preserve_documents: Keep uploaded files on a complete reset (truthiness)
            partial_reset_options: Filters, required for a partial reset; a
                PartialResetOptions or its raw JSON form, recorded as given

        Returns:
            ResetOutcome with the new itinerary (None after a complete reset)

        Raises:
            InvalidResetOptionsError: Unknown reset type, or partial without
                valid options
            NoItineraryError: Partial reset with no itinerary loaded
        """
        with self._store.lock:
            current = self._store.get()
            record = self._history.record(current, reset_type, partial_reset_options)
            self._metrics.set_history_size(len(self._history))

            if reset_type == ResetType.complete:
                self._store.clear()
                outcome = ResetOutcome(
                    itinerary=None,
                    message="Itinerary completely reset successfully",
                    record=record,
                )
            elif reset_type == ResetType.partial:
                try:
                    options = coerce_options(partial_reset_options)
                    if options is None:
                        raise InvalidResetOptionsError()
                except InvalidResetOptionsError:
                    self._reject(reset_type, "invalid_options", record)
                    raise
                if current is None:
                    self._reject(reset_type, "no_itinerary", record)
                    raise NoItineraryError()

                updated = filter_activities(current, options)
                self._store.set(updated)
                outcome = ResetOutcome(
                    itinerary=updated,
                    message="Itinerary partially reset successfully",
                    record=record,
                )
            else:
                self._reject(reset_type, "invalid_options", record)
                raise InvalidResetOptionsError()

        # Purge outside the lock; the itinerary change above is already committed
        if reset_type == ResetType.complete and not preserve_documents:
            try:
                outcome.files_purged = self.purge_documents()
            except PurgeError as e:
                outcome.cleanup_error = e

        self._log.log_reset(
            reset_type,
            "success" if outcome.cleanup_error is None else "cleanup_failed",
            timestamp=record.timestamp,
            activities_before=_count_activities(current),
            activities_after=_count_activities(outcome.itinerary),
            error_reason=outcome.cleanup_error.message if outcome.cleanup_error else None,
        )
        self._metrics.inc_reset(
            reset_type, "success" if outcome.cleanup_error is None else "cleanup_failed"
        )
        return outcome

    def _reject(self, reset_type: Any, outcome: str, record: ResetRecord) -> None:
        self._log.log_reset(reset_type, outcome, timestamp=record.timestamp)
        self._metrics.inc_reset(reset_type, outcome)

    def purge_documents(self) -> int:
        """Delete uploaded documents.

        Raises:
            PurgeError: On the first filesystem failure
        """
        upload_dir = str(self._documents.upload_dir)
        try:
            deleted = self._documents.purge()
        except PurgeError as e:
            self._log.log_purge(upload_dir, "error", error_reason=e.message)
            raise

        self._log.log_purge(upload_dir, "success", files_deleted=deleted)
        self._metrics.add_purged(deleted)
        return deleted

    def get_reset_history(self) -> list[ResetHistoryEntry]:
        """History metadata, oldest first, without snapshots."""
        with self._store.lock:
            return [record.to_entry() for record in self._history.entries()]

    def restore_from_history(self, timestamp: Any) -> dict[str, Any] | None:
        """Replace the current itinerary with the snapshot taken at ``timestamp``.

        Raises:
            BackupNotFoundError: No record has exactly this timestamp
        """
        with self._store.lock:
            record = self._history.find(timestamp)
            if record is None:
                self._log.log_restore(timestamp, "not_found")
                self._metrics.inc_restore("not_found")
                raise BackupNotFoundError(timestamp)

            self._store.set(record.snapshot)
            restored = copy.deepcopy(record.snapshot)

        self._log.log_restore(timestamp, "success")
        self._metrics.inc_restore("success")
        return restored
