"""
Schedule editor engine.

Owns one user's live schedule during an editing session and keeps it
chronologically contiguous: every edit re-anchors the rows that follow
so that ``entries[i + 1].start == entries[i].end``, while each
downstream row keeps the duration it had before the edit.

Every mutation is all-or-nothing. Input is validated before anything is
touched, the new schedule is built on copies, and only then swapped in
together with the history push.
"""

from __future__ import annotations

from typing import Iterable, Optional

from dayplanner.core.exceptions import FormatError, InvariantViolation, ValidationError
from dayplanner.core.logger import setup_logger
from dayplanner.models.schedule import ScheduleEntry, TimeField
from dayplanner.utils.time_utils import add_minutes, duration, is_canonical_time

logger = setup_logger(__name__)

DEFAULT_ROW_START = "6:00 AM"
DEFAULT_ROW_MINUTES = 60


def _copy(entries: Iterable[ScheduleEntry]) -> list[ScheduleEntry]:
    return [entry.model_copy() for entry in entries]


def original_durations(entries: list[ScheduleEntry]) -> list[Optional[int]]:
    """
    Per-row durations of a schedule; the last row has none.
    """
    durations: list[Optional[int]] = [
        duration(entry.start, entry.end) for entry in entries[:-1]
    ]
    if entries:
        durations.append(None)
    return durations


def _cascade(entries: list[ScheduleEntry], first: int, durations: list[Optional[int]]) -> None:
    """Re-anchor rows ``first..`` onto their predecessor, in place.

    ``durations[i]`` is the duration to keep for the row now at index ``i``.
    """
    last = len(entries) - 1
    for i in range(max(first, 1), len(entries)):
        entries[i].start = entries[i - 1].end
        if i < last:
            entries[i].end = add_minutes(entries[i].start, durations[i])


def _check_index(entries: list[ScheduleEntry], index: int) -> None:
    if not 0 <= index < len(entries):
        raise ValidationError(
            f"Row index {index} out of range",
            details={"index": index, "length": len(entries)},
        )


def cascade_time_edit(
    entries: list[ScheduleEntry],
    index: int,
    field: TimeField,
    value: str,
) -> list[ScheduleEntry]:
    """
    Return a new schedule with one time changed and later rows re-anchored.

    Editing ``start`` keeps the edited row's duration; editing ``end``
    lets the row's duration change. Rows after ``index`` keep their
    pre-edit durations. The last row's end is never recomputed.

    Raises:
        FormatError: ``value`` is not canonical time text
        ValidationError: bad index or field
    """
    _check_index(entries, index)
    if field not in ("start", "end"):
        raise ValidationError(f"Unknown time field: {field!r}")
    if not is_canonical_time(value):
        raise FormatError(value)

    durations = original_durations(entries)
    result = _copy(entries)
    setattr(result[index], field, value)

    if field == "start" and index < len(result) - 1:
        result[index].end = add_minutes(value, durations[index])

    _cascade(result, index + 1, durations)
    return result


def append_row(entries: list[ScheduleEntry]) -> list[ScheduleEntry]:
    """Return a new schedule with an empty one-hour row appended."""
    result = _copy(entries)
    start = result[-1].end if result else DEFAULT_ROW_START
    result.append(
        ScheduleEntry(start=start, end=add_minutes(start, DEFAULT_ROW_MINUTES), task="")
    )
    return result


def remove_row(entries: list[ScheduleEntry], index: int) -> list[ScheduleEntry]:
    """
    Return a new schedule without row ``index``.

    The row that slides into ``index`` takes over the removed row's start
    and keeps its own pre-deletion duration; everything after it is
    re-anchored. Rows before ``index`` are untouched.

    Raises:
        InvariantViolation: fewer than two rows
        ValidationError: bad index
    """
    if len(entries) <= 1:
        raise InvariantViolation(
            "At least one schedule entry must remain",
            details={"length": len(entries)},
        )
    _check_index(entries, index)

    # Pre-deletion durations shifted so that shifted[i] belongs to the row now at i.
    before = original_durations(entries)
    shifted = before[:index] + before[index + 1:]

    removed = entries[index]
    result = _copy(entries[:index]) + _copy(entries[index + 1:])

    if index < len(result):
        result[index].start = removed.start
        if index < len(result) - 1:
            result[index].end = add_minutes(result[index].start, shifted[index])
        _cascade(result, index + 1, shifted)
    return result


class ScheduleEditor:
    """
    Live schedule plus two-stack undo/redo history for one editing session.

    History is transient: ``load_schedule`` clears both stacks.
    """

    def __init__(self, entries: Optional[Iterable[ScheduleEntry]] = None):
        self._entries: list[ScheduleEntry] = []
        self._undo_stack: list[list[ScheduleEntry]] = []
        self._redo_stack: list[list[ScheduleEntry]] = []
        if entries is not None:
            self.load_schedule(entries)

    # -- state -------------------------------------------------------

    def load_schedule(self, entries: Iterable[ScheduleEntry]) -> None:
        self._entries = _copy(entries)
        self._undo_stack.clear()
        self._redo_stack.clear()

    def get_schedule(self) -> list[ScheduleEntry]:
        """Independent copy of the live schedule."""
        return _copy(self._entries)

    snapshot = get_schedule

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    # -- mutations ---------------------------------------------------

    def _commit(self, new_entries: list[ScheduleEntry]) -> None:
        self._undo_stack.append(self._entries)
        self._redo_stack.clear()
        self._entries = new_entries

    def apply_time_edit(self, index: int, field: TimeField, value: str) -> bool:
        """
        Change a start/end time and cascade.

        Returns False (schedule and history untouched) when ``value`` is
        not canonical time text.
        """
        try:
            new_entries = cascade_time_edit(self._entries, index, field, value)
        except FormatError:
            logger.debug(f"Rejected time edit row={index} field={field} value={value!r}")
            return False
        self._commit(new_entries)
        return True

    def apply_task_edit(self, index: int, task: str) -> None:
        _check_index(self._entries, index)
        new_entries = _copy(self._entries)
        new_entries[index].task = task
        self._commit(new_entries)

    def insert_row(self) -> None:
        self._commit(append_row(self._entries))

    def delete_row(self, index: int) -> None:
        """
        Raises:
            InvariantViolation: only one row left
        """
        self._commit(remove_row(self._entries, index))

    # -- history -----------------------------------------------------

    def undo(self) -> bool:
        if not self._undo_stack:
            return False
        self._redo_stack.append(self._entries)
        self._entries = self._undo_stack.pop()
        return True

    def redo(self) -> bool:
        if not self._redo_stack:
            return False
        self._undo_stack.append(self._entries)
        self._entries = self._redo_stack.pop()
        return True
