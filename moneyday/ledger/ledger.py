"""
Expense Ledger

The ledger owns the ordered list of expense records. It is the only
thing the UI talks to: it adds and removes records, answers the
daily/monthly questions, and tells subscribers when the list changed.

DESIGN DECISION: The ledger is lenient on purpose.
- A stored payload that cannot be decoded means "start empty".
- A write that fails keeps the change in memory for this session.
Neither is raised to the caller. Both are logged and audited, so they
are silent to the user but never invisible to a developer.

DESIGN DECISION: Every mutation persists the FULL collection, then
notifies subscribers, all under one lock. Two threads adding at the
same time can never interleave their writes and leave a stored list
that is missing one of the additions.
"""

import threading
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from moneyday.audit import AuditLogger, get_logger
from moneyday.ledger.calendar import LedgerCalendar
from moneyday.ledger.codec import ExpenseDecodeError, decode_expenses, encode_expenses
from moneyday.models.audit import AuditEvent, AuditEventBuilder
from moneyday.models.expense import ExpenseRecord
from moneyday.services.storage import (
    KeyValueStorageInterface,
    StorageError,
    StorageWriteError,
)


DEFAULT_STORAGE_KEY = "expenses"

ExpenseSnapshot = tuple[ExpenseRecord, ...]
ChangeCallback = Callable[[ExpenseSnapshot], None]
SaveErrorCallback = Callable[[Exception], None]

logger = get_logger(__name__)


class ExpenseLedger:
    """
    Ordered, persisted collection of expense records.

    Records keep insertion order; that order is the display order and
    the meaning of the positions passed to ``remove_at``.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        calendar: Optional[LedgerCalendar] = None,
        audit_logger: Optional[AuditLogger] = None,
        on_save_error: Optional[SaveErrorCallback] = None,
    ):
        """
        Create the ledger and hydrate it from storage.

        Args:
            storage: Persistence dependency (load/save raw bytes).
            key: Key the expense list is stored under.
            calendar: Calendar for day/month bucketing. Defaults to
                     system local time.
            audit_logger: Where mutations and recoveries are audited.
            on_save_error: Optional hook called with the exception when
                     a save fails. The mutation still stands.
        """
        self._storage = storage
        self._key = key
        self._calendar = calendar or LedgerCalendar()
        self._audit = audit_logger or AuditLogger()
        self._on_save_error = on_save_error
        self._lock = threading.RLock()
        self._items: list[ExpenseRecord] = []
        self._subscribers: list[ChangeCallback] = []
        self.load()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def items(self) -> ExpenseSnapshot:
        """Current records in display order (an immutable snapshot)."""
        with self._lock:
            return tuple(self._items)

    @property
    def key(self) -> str:
        return self._key

    @property
    def calendar(self) -> LedgerCalendar:
        return self._calendar

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> ExpenseSnapshot:
        """
        Hydrate from storage.

        Absent, unreadable, or undecodable payloads all collapse to an
        empty ledger. This never raises.
        """
        with self._lock:
            try:
                payload = self._storage.load(self._key)
            except StorageError as e:
                self._reset_after_failed_hydration(str(e))
                return tuple(self._items)

            if payload is None:
                self._items = []
                logger.debug("ledger_empty", key=self._key)
                return tuple(self._items)

            try:
                self._items = decode_expenses(payload)
            except ExpenseDecodeError as e:
                self._reset_after_failed_hydration(str(e))
                return tuple(self._items)

            self._record(AuditEventBuilder.ledger_hydrated, self._key, len(self._items))
            return tuple(self._items)

    def _reset_after_failed_hydration(self, reason: str) -> None:
        self._items = []
        self._record(AuditEventBuilder.hydration_reset, self._key, reason)

    def save(self) -> bool:
        """
        Write the full collection to storage.

        Returns False on failure; the in-memory records stay
        authoritative for the rest of the session.
        """
        with self._lock:
            try:
                payload = encode_expenses(self._items)
                if self._storage.save(self._key, payload):
                    return True
                error: Exception = StorageWriteError(
                    f"Storage rejected write for '{self._key}'"
                )
            except (StorageError, OSError, ValueError) as e:
                error = e

            self._record(AuditEventBuilder.save_failed, self._key, str(error))
            if self._on_save_error is not None:
                self._report_save_error(error)
            return False

    def _report_save_error(self, error: Exception) -> None:
        try:
            self._on_save_error(error)
        except Exception:
            logger.exception("save_error_callback_failed", key=self._key)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def append(self, record: ExpenseRecord) -> ExpenseSnapshot:
        """Add a record at the end of the list, persist, and notify."""
        with self._lock:
            event = self._build_event(AuditEventBuilder.expense_added, record, len(self._items) + 1)
            self._items.append(record)
            self._log_event(event)
            return self._commit()

    def remove_at(self, positions: Iterable[int]) -> ExpenseSnapshot:
        """
        Remove every record whose current position is in ``positions``.

        All removals happen as one update: one save and one
        notification for the whole batch. Positions outside the list
        (including negative ones) are ignored. If nothing matches, the
        ledger is left untouched and nobody is notified.
        """
        with self._lock:
            doomed = {p for p in positions if 0 <= p < len(self._items)}
            if not doomed:
                return tuple(self._items)

            event = self._build_event(
                AuditEventBuilder.expenses_removed,
                removed_ids=[self._items[p].id for p in sorted(doomed)],
                positions=sorted(doomed),
                item_count=len(self._items) - len(doomed),
            )
            self._items = [
                record for position, record in enumerate(self._items)
                if position not in doomed
            ]
            self._log_event(event)
            return self._commit()

    def _commit(self) -> ExpenseSnapshot:
        self.save()
        snapshot = tuple(self._items)
        self._notify(snapshot)
        return snapshot

    # -------------------------------------------------------------------------
    # Auditing
    # -------------------------------------------------------------------------
    # An audit failure is logged and dropped; it never aborts a mutation.

    def _build_event(self, builder: Callable[..., AuditEvent], *args, **kwargs) -> Optional[AuditEvent]:
        try:
            return builder(*args, **kwargs)
        except Exception:
            logger.exception("audit_event_build_failed", key=self._key, builder=builder.__name__)
            return None

    def _log_event(self, event: Optional[AuditEvent]) -> None:
        if event is None:
            return
        try:
            self._audit.log(event)
        except Exception:
            logger.exception("audit_log_failed", key=self._key, event_type=event.event_type.value)

    def _record(self, builder: Callable[..., AuditEvent], *args, **kwargs) -> None:
        self._log_event(self._build_event(builder, *args, **kwargs))

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """
        Register a callback fired with the new snapshot after every mutation.

        Returns a function that unsubscribes the callback.
        """
        with self._lock:
            self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def _notify(self, snapshot: ExpenseSnapshot) -> None:
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception as e:
                logger.exception("subscriber_failed", key=self._key)
                self._record(AuditEventBuilder.subscriber_failed, repr(callback), str(e))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def records_for_day(self, day: date) -> list[ExpenseRecord]:
        """Records on the same calendar day as ``day``, in display order."""
        target = self._calendar.day_of(day)
        return [
            record for record in self.items
            if self._calendar.day_of(record.date) == target
        ]

    def daily_total(self, day: date) -> Decimal:
        """Sum of amounts on the calendar day of ``day``; 0 if none."""
        return sum(
            (record.amount for record in self.records_for_day(day)),
            Decimal("0"),
        )

    def monthly_total(self, day: date) -> Decimal:
        """
        Sum of amounts from the first through the last calendar day
        (inclusive) of the month containing ``day``; 0 if none.
        """
        first, last = self._calendar.month_bounds(day)
        return sum(
            (
                record.amount for record in self.items
                if first <= self._calendar.day_of(record.date) <= last
            ),
            Decimal("0"),
        )
