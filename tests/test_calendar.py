import datetime as dt

import pytest

from clinicdesk.domain.appointments.calendar import (
    POINTER_MOVE,
    POINTER_UP,
    CalendarGrid,
    CalendarInteraction,
    InteractionError,
    InteractionState,
    ResizeEdge,
    resize_from_bottom,
    resize_from_top,
    snap_minutes,
)

GRID = CalendarGrid(slot_height=64, start_hour=8, end_hour=20)


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.mark.parametrize(
    "minutes, expected",
    [(0, 0), (7.4, 0), (7.5, 15), (22.4, 15), (22.5, 30), (-7.5, 0), (-7.6, -15)],
)
def test_snap_rounds_half_up_to_quarter_hours(minutes, expected):
    assert snap_minutes(minutes) == expected


def test_dragging_bottom_edge_one_slot_adds_an_hour():
    assert resize_from_bottom(60, 64, GRID) == 120


def test_small_drag_leaves_duration_unchanged():
    # 7 px is about 6.6 minutes
    assert resize_from_bottom(60, 7, GRID) == 60
    # 8 px is exactly 7.5 minutes and rounds up
    assert resize_from_bottom(60, 8, GRID) == 75


def test_duration_never_drops_below_minimum():
    assert resize_from_bottom(30, -128, GRID) == 15


def test_top_edge_moves_start_and_changes_duration_inversely():
    assert resize_from_top("10:00", 60, -64, GRID) == ("09:00", 120)
    assert resize_from_top("10:00", 60, 16, GRID) == ("10:15", 45)


def test_top_edge_outside_window_keeps_start():
    assert resize_from_top("08:15", 60, -64, GRID) == ("08:15", 120)


def test_top_edge_past_the_end_floors_duration():
    assert resize_from_top("10:00", 60, 128, GRID) == ("12:00", 15)


def test_drop_yields_move_request_on_the_hour(make_appointment):
    interaction = CalendarInteraction(grid=GRID)
    appointment = make_appointment(id="a1")

    interaction.start_drag(appointment)
    assert interaction.state == InteractionState.DRAGGING

    request = interaction.drop(dt.date(2024, 6, 12), 14)

    assert request.appointment.id == "a1"
    assert request.date == dt.date(2024, 6, 12)
    assert request.start_time == "14:00"
    assert interaction.state == InteractionState.IDLE


def test_drop_without_drag_is_an_error():
    with pytest.raises(InteractionError):
        CalendarInteraction(grid=GRID).drop(dt.date(2024, 6, 12), 9)


def test_cannot_resize_while_dragging(make_appointment):
    interaction = CalendarInteraction(grid=GRID)
    interaction.start_drag(make_appointment())

    with pytest.raises(InteractionError):
        interaction.start_resize(make_appointment(), ResizeEdge.BOTTOM, 0)


def test_resize_session_registers_and_removes_listeners(make_appointment):
    resized = []
    interaction = CalendarInteraction(grid=GRID, on_resize=resized.append)

    interaction.start_resize(make_appointment(id="a1"), ResizeEdge.BOTTOM, pointer_y=200)

    assert interaction.state == InteractionState.RESIZING_BOTTOM
    assert interaction.listeners.count(POINTER_MOVE) == 1
    assert interaction.listeners.count(POINTER_UP) == 1

    interaction.listeners.dispatch(POINTER_MOVE, 210)
    # Preview follows the pointer without snapping
    assert interaction.preview.height == pytest.approx(74)

    interaction.listeners.dispatch(POINTER_UP, 264)

    assert interaction.state == InteractionState.IDLE
    assert interaction.listeners.count(POINTER_MOVE) == 0
    assert interaction.listeners.count(POINTER_UP) == 0
    assert interaction.preview is None
    assert [(apt.id, apt.duration_minutes) for apt in resized] == [("a1", 120)]


def test_top_resize_reports_new_start(make_appointment):
    resized = []
    interaction = CalendarInteraction(grid=GRID, on_resize=resized.append)

    interaction.start_resize(make_appointment(start_time="10:00"), ResizeEdge.TOP, pointer_y=300)
    interaction.listeners.dispatch(POINTER_UP, 268)

    assert interaction.state == InteractionState.IDLE
    assert (resized[0].start_time, resized[0].duration_minutes) == ("09:30", 90)


def test_click_right_after_release_is_skipped(make_appointment):
    clock = FakeClock()
    interaction = CalendarInteraction(grid=GRID, clock=clock, skip_click_window_ms=100)
    assert interaction.should_handle_click()

    interaction.start_resize(make_appointment(), ResizeEdge.BOTTOM, pointer_y=0)
    interaction.listeners.dispatch(POINTER_UP, 0)

    assert not interaction.should_handle_click()
    clock.now += 0.05
    assert not interaction.should_handle_click()
    clock.now += 0.06
    assert interaction.should_handle_click()


def test_click_right_after_drop_is_skipped(make_appointment):
    clock = FakeClock()
    interaction = CalendarInteraction(grid=GRID, clock=clock)

    interaction.start_drag(make_appointment())
    interaction.drop(dt.date(2024, 6, 12), 9)

    assert not interaction.should_handle_click()
    clock.now += 1
    assert interaction.should_handle_click()


def test_grid_geometry():
    assert GRID.hour_slots()[0] == 8
    assert GRID.hour_slots()[-1] == 20
    assert GRID.top_offset("09:30") == pytest.approx(96)


def test_cancelled_drag_returns_to_idle(make_appointment):
    interaction = CalendarInteraction(grid=GRID)
    interaction.start_drag(make_appointment())

    interaction.cancel_drag()

    assert interaction.state == InteractionState.IDLE
    assert interaction.dragged is None
    assert interaction.should_handle_click()
