"""Application state: UI visibility, camera zoom, circles and performance figures."""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, NamedTuple, Optional

import psutil

from rimviz.export import DEFAULT_RESOLUTION, ExportFormat, ExportRequest
from rimviz.objects import Color, Style, World, create_circle_with_resolution

logger = logging.getLogger(__name__)

_ZOOM_LERP_SPEED = 8.0
_ZOOM_SNAP = 0.001
_BASE_HALF_WIDTH = 10.0
_BASE_HALF_HEIGHT = 8.0
_FILL_ALPHA = 0.3


class Level(Enum):
    """A traffic-light rating of a performance figure."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


def _report_toggle(subject: str, flag: bool) -> bool:
    """Log a visibility change for subject and hand the new state back."""
    logger.info("%s %s", subject, "shown" if flag else "hidden")
    return flag


@dataclass
class UiVisibility:
    show_ui: bool = True

    def toggle(self) -> bool:
        """Flip the control panel's visibility and return the new state."""
        self.show_ui = not self.show_ui
        return _report_toggle("UI", self.show_ui)


@dataclass
class CameraState:
    zoom: float = 1.0
    target_zoom: float = 1.0
    zoom_speed: float = 0.1
    min_zoom: float = 0.1
    max_zoom: float = 10.0
    translation: tuple[float, float] = (0.0, 0.0)
    target_translation: tuple[float, float] = (0.0, 0.0)
    previous_zoom: float = 1.0

    def apply_scroll(self, delta: float) -> float:
        """Move the target zoom by a scroll amount, clamped; return the new target."""
        target = self.target_zoom + delta * self.zoom_speed
        self.target_zoom = min(max(target, self.min_zoom), self.max_zoom)
        logger.info("Target zoom: %.2f", self.target_zoom)
        return self.target_zoom

    def update(self, dt: float) -> None:
        """Ease the current zoom towards the target over dt seconds."""
        self.zoom += (self.target_zoom - self.zoom) * _ZOOM_LERP_SPEED * dt
        if abs(self.target_zoom - self.zoom) < _ZOOM_SNAP:
            self.zoom = self.target_zoom

    def consume_zoom_change(self) -> Optional[float]:
        """Return the zoom if it changed since the last call, else None."""
        if abs(self.zoom - self.previous_zoom) > _ZOOM_SNAP:
            self.previous_zoom = self.zoom
            return self.zoom
        return None


@dataclass
class CoordinateSystemState:
    show_axes: bool = True
    show_grid: bool = True

    def toggle_axes(self) -> bool:
        """Flip axes visibility and return the new state."""
        self.show_axes = not self.show_axes
        return _report_toggle("Axes", self.show_axes)

    def toggle_grid(self) -> bool:
        """Flip grid visibility and return the new state."""
        self.show_grid = not self.show_grid
        return _report_toggle("Grid", self.show_grid)


@dataclass
class CircleState:
    circles: list[int] = field(default_factory=list)
    next_position: tuple[float, float] = (0.0, 0.0)
    default_radius: float = 1.0
    default_color: Color = Color.srgb(0.2, 0.8, 0.2)
    show_fill: bool = False
    resolution: Optional[int] = None
    """Segments per circle; None chooses automatically."""

    def style(self) -> Style:
        """The style new circles are drawn with."""
        fill = self.default_color.with_alpha(_FILL_ALPHA) if self.show_fill else None
        return Style(
            stroke_color=self.default_color,
            fill_color=fill,
            stroke_width=2.0,
            opacity=1.0,
        )

    def add_circle(self, world: World) -> int:
        """Spawn a circle at the next position and move the position along."""
        entity = create_circle_with_resolution(
            world, self.next_position, self.default_radius, self.style(), self.resolution
        )
        self.circles.append(entity)
        x, y = self.next_position
        logger.info("Added circle at (%.1f, %.1f), radius %.1f", x, y, self.default_radius)
        x += 2.0
        if x > 8.0:
            x = -8.0
            y += 2.0
        if y > 6.0:
            y = -6.0
        self.next_position = (x, y)
        return entity

    def clear(self, world: World) -> None:
        """Remove every added circle from the world and reset the position."""
        for entity in self.circles:
            if entity in world:
                world.despawn(entity)
        self.circles.clear()
        self.next_position = (0.0, 0.0)
        logger.info("Cleared all circles")


class HistorySummary(NamedTuple):
    average: float
    maximum: float
    minimum: float


def _cpu_usage() -> float:
    return float(psutil.cpu_percent(interval=None))


def memory_usage_estimate(now: float) -> float:
    """A simulated memory figure in MB that varies with the wall-clock second."""
    return 50.0 + (int(now) % 60) * 0.5


@dataclass
class PerformanceState:
    show_performance: bool = False
    max_history_len: int = 60
    last_update: float = field(default_factory=time.monotonic)
    frame_count: int = 0
    fps: float = 0.0
    memory_usage_mb: float = 0.0
    cpu_usage_percent: float = 0.0
    cpu_sampler: Callable[[], float] = _cpu_usage
    wall_clock: Callable[[], float] = time.time
    fps_history: deque = field(init=False)
    memory_history: deque = field(init=False)
    cpu_history: deque = field(init=False)

    def __post_init__(self) -> None:
        if self.max_history_len < 1:
            raise ValueError("max_history_len must be positive")
        self.fps_history = deque(maxlen=self.max_history_len)
        self.memory_history = deque(maxlen=self.max_history_len)
        self.cpu_history = deque(maxlen=self.max_history_len)

    def tick(self, now: float) -> bool:
        """Count a frame at monotonic time now; refresh figures once a second.

        Returns True when the figures were refreshed.
        """
        self.frame_count += 1
        elapsed = now - self.last_update
        if elapsed < 1.0:
            return False
        self.fps = self.frame_count / elapsed
        self.frame_count = 0
        self.last_update = now
        self.memory_usage_mb = memory_usage_estimate(self.wall_clock())
        self.cpu_usage_percent = float(self.cpu_sampler())
        self.fps_history.append(self.fps)
        self.memory_history.append(self.memory_usage_mb)
        self.cpu_history.append(self.cpu_usage_percent)
        return True

    def clear_history(self) -> None:
        self.fps_history.clear()
        self.memory_history.clear()
        self.cpu_history.clear()
        logger.info("Performance history cleared")


def fps_level(fps: float) -> Level:
    """Green at 60 fps and above, yellow from 30, red below."""
    if fps >= 60.0:
        return Level.GREEN
    if fps >= 30.0:
        return Level.YELLOW
    return Level.RED


def usage_level(value: float, warn: float, critical: float) -> Level:
    """Green below warn, yellow below critical, red otherwise."""
    if value < warn:
        return Level.GREEN
    if value < critical:
        return Level.YELLOW
    return Level.RED


def history_summary(history: Iterable[float]) -> Optional[HistorySummary]:
    """Average, maximum (never below zero) and minimum of a history, or None if empty."""
    values = list(history)
    if not values:
        return None
    return HistorySummary(
        average=sum(values) / len(values),
        maximum=max(0.0, *values),
        minimum=min(values),
    )


def view_range(zoom: float) -> tuple[tuple[float, float], tuple[float, float]]:
    """The visible x and y ranges at a zoom level."""
    half_width = _BASE_HALF_WIDTH / zoom
    half_height = _BASE_HALF_HEIGHT / zoom
    return ((-half_width, half_width), (-half_height, half_height))


def screenshot_request(now: float) -> ExportRequest:
    """A PNG screenshot request named after the wall-clock second."""
    return ExportRequest(
        ExportFormat.PNG, f"rim_screenshot_{int(now)}.png", DEFAULT_RESOLUTION
    )