"""
Unit tests for the schedule editor engine.
"""

import pytest

from dayplanner.core.exceptions import InvariantViolation, ValidationError
from dayplanner.models.schedule import ScheduleEntry, default_schedule
from dayplanner.services.schedule_editor import (
    ScheduleEditor,
    append_row,
    cascade_time_edit,
    original_durations,
    remove_row,
)
from dayplanner.utils.time_utils import add_minutes, duration


def _entries(*rows):
    return [ScheduleEntry(start=start, end=end, task=task) for start, end, task in rows]


@pytest.fixture
def three_rows():
    return _entries(
        ("6:00 AM", "7:00 AM", "A"),
        ("7:00 AM", "9:00 AM", "B"),
        ("9:00 AM", "10:00 AM", "C"),
    )


class TestOriginalDurations:
    def test_last_row_has_none(self, three_rows):
        assert original_durations(three_rows) == [60, 120, None]

    def test_empty(self):
        assert original_durations([]) == []


class TestTimeEdit:
    def test_start_edit_shifts_row_and_last_row_absorbs(self):
        editor = ScheduleEditor(_entries(("6:00 AM", "7:00 AM", "A"), ("7:00 AM", "8:00 AM", "B")))

        assert editor.apply_time_edit(0, "start", "6:30 AM") is True

        assert editor.get_schedule() == _entries(
            ("6:30 AM", "7:30 AM", "A"),
            ("7:30 AM", "8:00 AM", "B"),
        )

    def test_start_edit_ripples_through_middle_rows(self, three_rows):
        editor = ScheduleEditor(three_rows)
        editor.apply_time_edit(0, "start", "5:00 AM")

        assert editor.get_schedule() == _entries(
            ("5:00 AM", "6:00 AM", "A"),
            ("6:00 AM", "8:00 AM", "B"),
            ("8:00 AM", "10:00 AM", "C"),
        )

    def test_end_edit_changes_own_duration_only(self, three_rows):
        editor = ScheduleEditor(three_rows)
        editor.apply_time_edit(0, "end", "7:30 AM")

        assert editor.get_schedule() == _entries(
            ("6:00 AM", "7:30 AM", "A"),
            ("7:30 AM", "9:30 AM", "B"),
            ("9:30 AM", "10:00 AM", "C"),
        )

    def test_middle_start_edit_leaves_earlier_rows(self, three_rows):
        editor = ScheduleEditor(three_rows)
        editor.apply_time_edit(1, "start", "7:30 AM")

        result = editor.get_schedule()
        assert result[0] == three_rows[0]
        assert result[1] == ScheduleEntry(start="7:30 AM", end="9:30 AM", task="B")
        assert result[2] == ScheduleEntry(start="9:30 AM", end="10:00 AM", task="C")

    def test_last_row_start_edit_keeps_its_end(self, three_rows):
        editor = ScheduleEditor(three_rows)
        editor.apply_time_edit(2, "start", "9:30 AM")

        result = editor.get_schedule()
        assert result[:2] == three_rows[:2]
        assert result[2] == ScheduleEntry(start="9:30 AM", end="10:00 AM", task="C")

    def test_last_row_end_edit_touches_nothing_else(self, three_rows):
        editor = ScheduleEditor(three_rows)
        editor.apply_time_edit(2, "end", "11:00 PM")

        result = editor.get_schedule()
        assert result[:2] == three_rows[:2]
        assert result[2].end == "11:00 PM"

    def test_cascade_wraps_past_midnight(self):
        editor = ScheduleEditor(
            _entries(
                ("10:00 PM", "11:00 PM", "A"),
                ("11:00 PM", "1:00 AM", "B"),
                ("1:00 AM", "2:00 AM", "C"),
            )
        )
        editor.apply_time_edit(0, "start", "11:00 PM")

        assert editor.get_schedule() == _entries(
            ("11:00 PM", "12:00 AM", "A"),
            ("12:00 AM", "2:00 AM", "B"),
            ("2:00 AM", "2:00 AM", "C"),
        )

    def test_zero_length_row_counts_as_full_day(self):
        editor = ScheduleEditor(
            _entries(
                ("6:00 AM", "6:00 AM", "A"),
                ("6:00 AM", "7:00 AM", "B"),
                ("7:00 AM", "8:00 AM", "C"),
            )
        )
        editor.apply_time_edit(0, "start", "8:00 AM")

        result = editor.get_schedule()
        # A full-day span lands on the same clock time.
        assert result[0].end == "8:00 AM"
        assert (result[1].start, result[1].end) == ("8:00 AM", "9:00 AM")
        assert result[2].start == "9:00 AM"

    @pytest.mark.parametrize(
        "value", ["6:00", "06:00 AM", "6:00 am", "13:00 PM", "", "6:0 AM", "6:00 AM\n", "6:00 AM "]
    )
    def test_malformed_time_is_rejected_silently(self, three_rows, value):
        editor = ScheduleEditor(three_rows)

        assert editor.apply_time_edit(0, "start", value) is False
        assert editor.get_schedule() == three_rows
        assert editor.can_undo is False

    def test_trailing_newline_never_reaches_the_next_row(self):
        rows = _entries(("6:00 AM", "7:00 AM", "A"), ("7:00 AM", "8:00 AM", "B"))
        editor = ScheduleEditor(rows)

        assert editor.apply_time_edit(0, "end", "7:30 AM\n") is False
        assert [(e.start, e.end) for e in editor.get_schedule()] == [
            ("6:00 AM", "7:00 AM"),
            ("7:00 AM", "8:00 AM"),
        ]

    def test_bad_index_raises(self, three_rows):
        editor = ScheduleEditor(three_rows)
        with pytest.raises(ValidationError):
            editor.apply_time_edit(3, "start", "6:00 AM")
        with pytest.raises(ValidationError):
            editor.apply_time_edit(-1, "start", "6:00 AM")
        assert editor.get_schedule() == three_rows

    def test_bad_field_raises(self, three_rows):
        with pytest.raises(ValidationError):
            cascade_time_edit(three_rows, 0, "task", "6:00 AM")

    def test_pure_function_does_not_mutate_input(self, three_rows):
        before = [entry.model_copy() for entry in three_rows]
        cascade_time_edit(three_rows, 0, "start", "5:00 AM")
        assert three_rows == before


class TestCascadeProperties:
    @pytest.mark.parametrize("index", range(6))
    @pytest.mark.parametrize("new_start", ["5:15 AM", "12:00 PM", "11:45 PM", "12:00 AM"])
    def test_start_edit_preserves_durations(self, index, new_start):
        seed = default_schedule()
        result = cascade_time_edit(seed, index, "start", new_start)

        assert result[index].end == add_minutes(new_start, duration(seed[index].start, seed[index].end))
        for i in range(index + 1, len(seed) - 1):
            assert duration(result[i].start, result[i].end) == duration(seed[i].start, seed[i].end)

    @pytest.mark.parametrize("index", range(7))
    @pytest.mark.parametrize("field", ["start", "end"])
    def test_chain_holds_after_edited_row(self, index, field):
        seed = default_schedule()
        result = cascade_time_edit(seed, index, field, "8:20 AM")

        for i in range(index, len(result) - 1):
            assert result[i + 1].start == result[i].end
        for i in range(index):
            assert result[i] == seed[i]

    def test_last_row_end_never_recomputed(self):
        seed = default_schedule()
        for index in range(len(seed) - 1):
            result = cascade_time_edit(seed, index, "start", "7:10 AM")
            assert result[-1].end == seed[-1].end


class TestTaskEdit:
    def test_changes_only_task(self, three_rows):
        editor = ScheduleEditor(three_rows)
        editor.apply_task_edit(1, "Deep work")

        result = editor.get_schedule()
        assert result[1] == ScheduleEntry(start="7:00 AM", end="9:00 AM", task="Deep work")
        assert result[0] == three_rows[0]
        assert result[2] == three_rows[2]
        assert editor.can_undo is True

    def test_bad_index_raises(self, three_rows):
        editor = ScheduleEditor(three_rows)
        with pytest.raises(ValidationError):
            editor.apply_task_edit(5, "x")
        assert editor.can_undo is False


class TestInsertRow:
    def test_appends_one_hour_after_last(self):
        editor = ScheduleEditor(_entries(("6:00 AM", "7:00 AM", "A")))
        editor.insert_row()

        assert editor.get_schedule() == _entries(
            ("6:00 AM", "7:00 AM", "A"),
            ("7:00 AM", "8:00 AM", ""),
        )

    def test_empty_schedule_uses_default_start(self):
        assert append_row([]) == _entries(("6:00 AM", "7:00 AM", ""))

    def test_wraps_past_midnight(self):
        result = append_row(_entries(("10:00 PM", "11:30 PM", "Late")))
        assert result[-1] == ScheduleEntry(start="11:30 PM", end="12:30 AM", task="")

    def test_earlier_rows_untouched(self, three_rows):
        result = append_row(three_rows)
        assert result[:3] == three_rows
        assert len(result) == 4


class TestDeleteRow:
    def test_middle_row_slides_next_row_into_slot(self, three_rows):
        editor = ScheduleEditor(three_rows)
        editor.delete_row(1)

        assert editor.get_schedule() == _entries(
            ("6:00 AM", "7:00 AM", "A"),
            ("7:00 AM", "10:00 AM", "C"),
        )

    def test_first_row_keeps_day_start(self, three_rows):
        assert remove_row(three_rows, 0) == _entries(
            ("6:00 AM", "8:00 AM", "B"),
            ("8:00 AM", "10:00 AM", "C"),
        )

    def test_last_row(self, three_rows):
        assert remove_row(three_rows, 2) == three_rows[:2]

    def test_following_row_keeps_its_own_duration(self):
        entries = _entries(
            ("6:00 AM", "7:00 AM", "A"),
            ("7:00 AM", "9:00 AM", "B"),
            ("9:00 AM", "10:00 AM", "C"),
            ("10:00 AM", "12:00 PM", "D"),
        )
        assert remove_row(entries, 1) == _entries(
            ("6:00 AM", "7:00 AM", "A"),
            ("7:00 AM", "8:00 AM", "C"),
            ("8:00 AM", "12:00 PM", "D"),
        )

    def test_floor_of_one_row(self):
        single = _entries(("6:00 AM", "7:00 AM", "A"))
        editor = ScheduleEditor(single)

        with pytest.raises(InvariantViolation):
            editor.delete_row(0)

        assert editor.get_schedule() == single
        assert editor.can_undo is False

    def test_bad_index_raises(self, three_rows):
        with pytest.raises(ValidationError):
            remove_row(three_rows, 3)

    def test_chain_holds_from_deleted_slot(self):
        seed = default_schedule()
        for index in range(len(seed)):
            result = remove_row(seed, index)
            assert len(result) == len(seed) - 1
            assert result[:index] == seed[:index]
            for i in range(max(index - 1, 0), len(result) - 1):
                assert result[i + 1].start == result[i].end


class TestHistory:
    def test_undo_redo_on_empty_stacks(self, three_rows):
        editor = ScheduleEditor(three_rows)
        assert editor.undo() is False
        assert editor.redo() is False
        assert editor.get_schedule() == three_rows

    def test_undo_restores_state_before_each_kind_of_op(self, three_rows):
        ops = [
            lambda e: e.apply_time_edit(0, "start", "5:00 AM"),
            lambda e: e.apply_task_edit(2, "Reading"),
            lambda e: e.insert_row(),
            lambda e: e.delete_row(1),
        ]
        for op in ops:
            editor = ScheduleEditor(three_rows)
            editor.apply_task_edit(0, "Warmup")
            before = editor.get_schedule()

            op(editor)
            after = editor.get_schedule()

            assert editor.undo() is True
            assert editor.get_schedule() == before
            assert editor.redo() is True
            assert editor.get_schedule() == after

    def test_walk_back_to_start_and_forward_again(self, three_rows):
        editor = ScheduleEditor(three_rows)
        states = [editor.get_schedule()]
        editor.apply_time_edit(1, "end", "9:30 AM")
        states.append(editor.get_schedule())
        editor.insert_row()
        states.append(editor.get_schedule())
        editor.apply_task_edit(3, "Wind down")
        states.append(editor.get_schedule())

        assert editor.undo_depth == 3
        for expected in reversed(states[:-1]):
            editor.undo()
            assert editor.get_schedule() == expected
        assert editor.can_undo is False
        assert editor.redo_depth == 3

        for expected in states[1:]:
            editor.redo()
            assert editor.get_schedule() == expected
        assert editor.can_redo is False

    def test_new_edit_clears_redo(self, three_rows):
        editor = ScheduleEditor(three_rows)
        editor.apply_task_edit(0, "X")
        editor.undo()
        assert editor.can_redo is True

        editor.apply_task_edit(1, "Y")

        assert editor.can_redo is False
        assert editor.redo() is False

    def test_load_schedule_resets_history(self, three_rows):
        editor = ScheduleEditor(three_rows)
        editor.apply_task_edit(0, "X")
        editor.undo()

        editor.load_schedule(default_schedule())

        assert editor.can_undo is False
        assert editor.can_redo is False
        assert editor.get_schedule() == default_schedule()


class TestSnapshotIndependence:
    def test_returned_schedule_is_a_copy(self, three_rows):
        editor = ScheduleEditor(three_rows)
        snapshot = editor.get_schedule()
        snapshot[0].task = "tampered"
        snapshot.append(ScheduleEntry(start="1:00 PM", end="2:00 PM"))

        assert editor.get_schedule() == three_rows

    def test_snapshot_is_detached_from_later_edits(self, three_rows):
        editor = ScheduleEditor(three_rows)
        handed_out = editor.snapshot()

        editor.apply_time_edit(0, "end", "8:00 AM")
        handed_out[1].task = "tampered"

        assert handed_out == _entries(
            ("6:00 AM", "7:00 AM", "A"),
            ("7:00 AM", "9:00 AM", "tampered"),
            ("9:00 AM", "10:00 AM", "C"),
        )
        assert editor.snapshot()[0].end == "8:00 AM"
        assert editor.snapshot()[1].task == "B"

    def test_loaded_entries_are_copied(self, three_rows):
        editor = ScheduleEditor(three_rows)
        three_rows[0].task = "tampered"

        assert editor.get_schedule()[0].task == "A"

    def test_history_snapshots_survive_later_edits(self, three_rows):
        editor = ScheduleEditor(three_rows)
        editor.apply_task_edit(0, "first")
        editor.apply_task_edit(0, "second")
        editor.apply_time_edit(0, "start", "5:00 AM")

        editor.undo()
        editor.undo()
        assert editor.get_schedule()[0] == ScheduleEntry(start="6:00 AM", end="7:00 AM", task="first")
        editor.undo()
        assert editor.get_schedule() == _entries(
            ("6:00 AM", "7:00 AM", "A"),
            ("7:00 AM", "9:00 AM", "B"),
            ("9:00 AM", "10:00 AM", "C"),
        )

    def test_len(self, three_rows):
        assert len(ScheduleEditor(three_rows)) == 3
        assert len(ScheduleEditor()) == 0
