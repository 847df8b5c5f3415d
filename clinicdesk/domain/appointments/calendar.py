"""
Calendar drag and resize interactions

Pointer deltas are converted to minutes with the grid's slot height (pixels
per hour). While a resize is in progress the preview follows the pointer
unsnapped; on release the delta is snapped to the nearest 15 minutes and the
duration is floored at the minimum duration.

`CalendarInteraction` is the state machine driving one calendar view:

    idle -> dragging -> idle                  (drag an appointment, drop on a slot)
    idle -> resizing_top|resizing_bottom -> idle

Pointer-move/pointer-up handlers are registered only for the duration of a
resize. A release or a drop arms a short "skip next click" window so the click
the input system dispatches right after pointer-up does not open the editor.
"""

import datetime as dt
import logging
import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from ...config import (
    CALENDAR_END_HOUR,
    CALENDAR_START_HOUR,
    MIN_DURATION_MINUTES,
    SKIP_CLICK_WINDOW_MS,
    SLOT_HEIGHT_PX,
    SNAP_MINUTES,
)
from ...shared.validators import minutes_to_time, time_to_minutes
from .schemas import Appointment

logger = logging.getLogger(__name__)

POINTER_MOVE = "pointermove"
POINTER_UP = "pointerup"


class InteractionState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING_TOP = "resizing_top"
    RESIZING_BOTTOM = "resizing_bottom"


class ResizeEdge(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"


class InteractionError(RuntimeError):
    """Raised when an interaction event arrives in the wrong state"""


def snap_minutes(minutes: float, step: int = SNAP_MINUTES) -> int:
    """Round to the nearest step, halves rounding up"""
    return int(math.floor(minutes / step + 0.5)) * step


def preview_height(duration_minutes: float, slot_height: float = SLOT_HEIGHT_PX) -> float:
    return duration_minutes / 60 * slot_height


@dataclass(frozen=True)
class CalendarGrid:
    """Geometry of the visible day: slot height in pixels per hour and the hour window"""

    slot_height: float = SLOT_HEIGHT_PX
    start_hour: int = CALENDAR_START_HOUR
    end_hour: int = CALENDAR_END_HOUR
    snap_step: int = SNAP_MINUTES
    min_duration: int = MIN_DURATION_MINUTES

    def pixels_to_minutes(self, delta_pixels: float) -> float:
        return delta_pixels / self.slot_height * 60

    def snap(self, minutes: float) -> int:
        return snap_minutes(minutes, self.snap_step)

    def accepts_start(self, total_minutes: int) -> bool:
        return self.start_hour * 60 <= total_minutes <= self.end_hour * 60

    def hour_slots(self) -> list[int]:
        return list(range(self.start_hour, self.end_hour + 1))

    def top_offset(self, start_time: str) -> float:
        """Pixel offset of a start time from the top of the grid"""
        return (time_to_minutes(start_time) - self.start_hour * 60) / 60 * self.slot_height


def resize_from_bottom(duration_minutes: int, delta_pixels: float, grid: CalendarGrid) -> int:
    """New duration after dragging the bottom edge by `delta_pixels` (positive = down)"""
    snapped = grid.snap(grid.pixels_to_minutes(delta_pixels))
    return max(grid.min_duration, duration_minutes + snapped)


def resize_from_top(
    start_time: str, duration_minutes: int, delta_pixels: float, grid: CalendarGrid
) -> tuple[str, int]:
    """
    New (start_time, duration) after dragging the top edge.

    The start moves with the snapped delta and the duration changes inversely.
    A start outside the visible window is rejected and the original start
    kept; the duration still follows the delta, floored at the minimum.
    """
    snapped = grid.snap(grid.pixels_to_minutes(delta_pixels))
    new_duration = max(grid.min_duration, duration_minutes - snapped)
    new_start = time_to_minutes(start_time) + snapped

    if grid.accepts_start(new_start):
        return minutes_to_time(new_start), new_duration
    logger.debug(f"Start {new_start} min outside calendar window, keeping {start_time}")
    return start_time, new_duration


@dataclass
class ResizePreview:
    """Unsnapped geometry shown while the pointer is still down"""

    top_offset: float
    height: float


def preview_resize(
    edge: ResizeEdge, duration_minutes: int, delta_pixels: float, grid: CalendarGrid
) -> ResizePreview:
    minutes = grid.pixels_to_minutes(delta_pixels)
    if edge == ResizeEdge.BOTTOM:
        duration = max(grid.min_duration, duration_minutes + minutes)
        return ResizePreview(top_offset=0.0, height=preview_height(duration, grid.slot_height))
    duration = max(grid.min_duration, duration_minutes - minutes)
    return ResizePreview(top_offset=delta_pixels, height=preview_height(duration, grid.slot_height))


@dataclass
class MoveRequest:
    """A dropped appointment waiting for the caller to choose move or copy"""

    appointment: Appointment
    date: dt.date
    start_time: str


class PointerListenerRegistry:
    """Global pointer event listeners, keyed by event name"""

    def __init__(self):
        self._handlers: dict[str, list[Callable[[float], None]]] = {}

    def add(self, event: str, handler: Callable[[float], None]) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def remove(self, event: str, handler: Callable[[float], None]) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def dispatch(self, event: str, pointer_y: float) -> None:
        for handler in list(self._handlers.get(event, [])):
            handler(pointer_y)

    def count(self, event: str) -> int:
        return len(self._handlers.get(event, []))


@dataclass
class _ResizeSession:
    appointment: Appointment
    edge: ResizeEdge
    initial_y: float
    preview: Optional[ResizePreview] = None


@dataclass
class CalendarInteraction:
    grid: CalendarGrid = field(default_factory=CalendarGrid)
    listeners: PointerListenerRegistry = field(default_factory=PointerListenerRegistry)
    on_resize: Optional[Callable[[Appointment], None]] = None
    clock: Callable[[], float] = time.monotonic
    skip_click_window_ms: int = SKIP_CLICK_WINDOW_MS

    state: InteractionState = field(default=InteractionState.IDLE, init=False)
    dragged: Optional[Appointment] = field(default=None, init=False)
    _resize: Optional[_ResizeSession] = field(default=None, init=False, repr=False)
    _skip_click_until: float = field(default=0.0, init=False, repr=False)

    # Drag and drop

    def start_drag(self, appointment: Appointment) -> None:
        if self.state != InteractionState.IDLE:
            raise InteractionError(f"Cannot start a drag while {self.state.value}")
        self.dragged = appointment
        self.state = InteractionState.DRAGGING

    def drop(self, day: dt.date, hour: int) -> MoveRequest:
        """Drop the dragged appointment on the (day, hour) slot"""
        if self.state != InteractionState.DRAGGING or self.dragged is None:
            raise InteractionError("Nothing is being dragged")
        request = MoveRequest(appointment=self.dragged, date=day, start_time=f"{hour:02d}:00")
        self._arm_skip_click()
        self.dragged = None
        self.state = InteractionState.IDLE
        return request

    def cancel_drag(self) -> None:
        self.dragged = None
        if self.state == InteractionState.DRAGGING:
            self.state = InteractionState.IDLE

    # Resize

    def start_resize(self, appointment: Appointment, edge: ResizeEdge, pointer_y: float) -> None:
        if self.state != InteractionState.IDLE:
            raise InteractionError(f"Cannot start a resize while {self.state.value}")
        edge = ResizeEdge(edge)
        self._resize = _ResizeSession(
            appointment=appointment,
            edge=edge,
            initial_y=pointer_y,
            preview=preview_resize(edge, appointment.duration_minutes, 0.0, self.grid),
        )
        self.state = (
            InteractionState.RESIZING_TOP if edge == ResizeEdge.TOP else InteractionState.RESIZING_BOTTOM
        )
        self.listeners.add(POINTER_MOVE, self._on_pointer_move)
        self.listeners.add(POINTER_UP, self._on_pointer_up)

    @property
    def preview(self) -> Optional[ResizePreview]:
        return self._resize.preview if self._resize else None

    def _on_pointer_move(self, pointer_y: float) -> None:
        session = self._resize
        if session is None:
            return
        session.preview = preview_resize(
            session.edge, session.appointment.duration_minutes, pointer_y - session.initial_y, self.grid
        )

    def _on_pointer_up(self, pointer_y: float) -> None:
        session = self._resize
        if session is None:
            return

        self._arm_skip_click()
        appointment = session.appointment
        delta = pointer_y - session.initial_y

        if session.edge == ResizeEdge.BOTTOM:
            updates = {"duration_minutes": resize_from_bottom(appointment.duration_minutes, delta, self.grid)}
        else:
            start_time, duration = resize_from_top(
                appointment.start_time, appointment.duration_minutes, delta, self.grid
            )
            updates = {"start_time": start_time, "duration_minutes": duration}

        self._end_resize()
        if self.on_resize:
            self.on_resize(appointment.model_copy(update=updates))

    def _end_resize(self) -> None:
        self.listeners.remove(POINTER_MOVE, self._on_pointer_move)
        self.listeners.remove(POINTER_UP, self._on_pointer_up)
        self._resize = None
        self.state = InteractionState.IDLE

    # Clicks

    def _arm_skip_click(self) -> None:
        self._skip_click_until = self.clock() + self.skip_click_window_ms / 1000

    def should_handle_click(self) -> bool:
        """False for the click dispatched right after a drop or a resize release"""
        return self.clock() >= self._skip_click_until
