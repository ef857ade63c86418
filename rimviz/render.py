"""Turn scene objects into backend-neutral draw commands."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from rimviz.axes import Axes, Grid
from rimviz.objects import (
    Color,
    MathCircle,
    MathObject,
    Position2D,
    Style,
    Transform,
    Vec2,
    Vec3,
    Visibility,
    World,
)

SCALE = 50.0
"""Pixels per mathematical unit."""

_TICK_HALF_LENGTH = 8.0
_ARROW_SIZE = 15.0
_ARROW_MARGIN = 30.0
_ORIGIN_RADIUS = 4.0
_NUMBER_COLOR = Color.srgba(0.8, 0.8, 0.8, 1.0)


@dataclass(frozen=True)
class LineCommand:
    start: Vec3
    end: Vec3
    color: Color


@dataclass(frozen=True)
class CircleCommand:
    center: Vec2
    radius: float
    color: Color
    resolution: Optional[int] = None
    """Number of segments; None leaves the choice to the backend."""


@dataclass(frozen=True)
class TextCommand:
    text: str
    position: Vec3
    font_size: float
    color: Color


DrawCommand = Union[LineCommand, CircleCommand, TextCommand]


@dataclass(frozen=True)
class AxisLabel:
    """A numeric tick label on an axis."""

    axis: str
    value: float


@dataclass(frozen=True)
class AxisNameLabel:
    """An axis name ("x", "y") or the origin marker ("origin")."""

    axis: str


def _steps(start: float, end: float, step: float) -> Iterator[float]:
    """Yield multiples of step from the first one at or above start up to end."""
    if not step > 0.0:
        raise ValueError(f"spacing must be positive, got {step}")
    value = math.ceil(start / step) * step
    while value <= end:
        yield value
        value += step


def _is_hidden(visibility: Visibility) -> bool:
    return visibility is Visibility.HIDDEN


def render_axes(
    axes: Axes,
    position: Position2D,
    style: Style,
    visibility: Visibility,
    window_size: tuple[float, float],
) -> list[DrawCommand]:
    """Draw the axis lines, arrows, ticks and origin marker."""
    if _is_hidden(visibility):
        return []
    width, height = window_size
    px, py = position.x, position.y
    half_width = width * 0.6
    half_height = height * 0.6
    color = style.stroke_color

    commands: list[DrawCommand] = [
        LineCommand((-half_width + px, py, 0.0), (half_width + px, py, 0.0), color),
        LineCommand((px, -half_height + py, 0.0), (px, half_height + py, 0.0), color),
    ]

    if axes.show_arrows:
        # Arrow tips stay at fixed screen positions regardless of the axes position.
        x_tip = (half_width - _ARROW_MARGIN, 0.0, 0.0)
        y_tip = (0.0, half_height - _ARROW_MARGIN, 0.0)
        commands += [
            LineCommand(x_tip, (x_tip[0] - _ARROW_SIZE, -_ARROW_SIZE * 0.5, 0.0), color),
            LineCommand(x_tip, (x_tip[0] - _ARROW_SIZE, _ARROW_SIZE * 0.5, 0.0), color),
            LineCommand(y_tip, (-_ARROW_SIZE * 0.5, y_tip[1] - _ARROW_SIZE, 0.0), color),
            LineCommand(y_tip, (_ARROW_SIZE * 0.5, y_tip[1] - _ARROW_SIZE, 0.0), color),
        ]

    if axes.show_numbers:
        for x in _steps(axes.x_range[0], axes.x_range[1], axes.tick_spacing):
            if abs(x) > 0.01:
                tx, ty = x * SCALE + px, py
                commands.append(
                    LineCommand(
                        (tx, ty - _TICK_HALF_LENGTH, 0.0),
                        (tx, ty + _TICK_HALF_LENGTH, 0.0),
                        color,
                    )
                )
        for y in _steps(axes.y_range[0], axes.y_range[1], axes.tick_spacing):
            if abs(y) > 0.01:
                tx, ty = px, y * SCALE + py
                commands.append(
                    LineCommand(
                        (tx - _TICK_HALF_LENGTH, ty, 0.0),
                        (tx + _TICK_HALF_LENGTH, ty, 0.0),
                        color,
                    )
                )

    commands.append(CircleCommand((px, py), _ORIGIN_RADIUS, color))
    return commands


def render_grid(
    grid: Grid,
    position: Position2D,
    style: Style,
    visibility: Visibility,
    window_size: tuple[float, float],
) -> list[DrawCommand]:
    """Draw major grid lines and, if enabled, the minor lines between them."""
    if _is_hidden(visibility):
        return []
    width, height = window_size
    px, py = position.x, position.y
    half_width = width * 0.7
    half_height = height * 0.7
    x_lo, x_hi = -half_width / SCALE, half_width / SCALE
    y_lo, y_hi = -half_height / SCALE, half_height / SCALE

    def vertical(x: float, color: Color) -> LineCommand:
        return LineCommand(
            (x * SCALE + px, y_lo * SCALE + py, 0.0),
            (x * SCALE + px, y_hi * SCALE + py, 0.0),
            color,
        )

    def horizontal(y: float, color: Color) -> LineCommand:
        return LineCommand(
            (x_lo * SCALE + px, y * SCALE + py, 0.0),
            (x_hi * SCALE + px, y * SCALE + py, 0.0),
            color,
        )

    major_color = style.stroke_color.with_alpha(grid.opacity)
    commands: list[DrawCommand] = [
        vertical(x, major_color) for x in _steps(x_lo, x_hi, grid.spacing)
    ]
    commands += [horizontal(y, major_color) for y in _steps(y_lo, y_hi, grid.spacing)]

    if grid.show_minor_grid and grid.minor_spacing > 0.0:
        minor_color = style.stroke_color.with_alpha(grid.opacity * 0.3)
        commands += [
            vertical(x, minor_color)
            for x in _steps(x_lo, x_hi, grid.minor_spacing)
            if abs(math.fmod(x, grid.spacing)) > 0.01
        ]
        commands += [
            horizontal(y, minor_color)
            for y in _steps(y_lo, y_hi, grid.minor_spacing)
            if abs(math.fmod(y, grid.spacing)) > 0.01
        ]
    return commands


def circle_resolution(scaled_radius: float) -> int:
    """Pick a segment count that keeps a circle of this pixel radius smooth."""
    if scaled_radius < 50.0:
        return 32
    if scaled_radius < 100.0:
        return 48
    if scaled_radius < 200.0:
        return 64
    return 96


def render_circle(
    circle: MathCircle, transform: Transform, visibility: Visibility
) -> list[DrawCommand]:
    """Draw a circle; filled circles get a translucent pass before the outline."""
    if _is_hidden(visibility):
        return []
    x, y = transform.translation[0], transform.translation[1]
    center = (x * SCALE, y * SCALE)
    radius = circle.radius * SCALE
    resolution = (
        circle.resolution
        if circle.resolution is not None
        else circle_resolution(radius)
    )
    outline = CircleCommand(center, radius, circle.color, resolution)
    if circle.filled:
        fill = CircleCommand(center, radius, circle.color.with_alpha(0.6), resolution)
        return [fill, outline]
    return [outline]


def format_tick_label(value: float, tick_spacing: float) -> str:
    """Format a tick value with as many decimals as the spacing calls for."""
    if tick_spacing >= 1.0:
        return f"{value:.0f}"
    if tick_spacing >= 0.1:
        return f"{value:.1f}"
    return f"{value:.2f}"


def axis_name_labels(axes: Axes) -> list[tuple[AxisNameLabel, TextCommand]]:
    """The x and y axis names and the origin marker, relative to the axes."""
    white = Color.WHITE  # type: ignore[attr-defined]
    return [
        (
            AxisNameLabel("x"),
            TextCommand(
                axes.x_label, (axes.x_range[1] * SCALE + 25.0, -15.0, 1.0), 24.0, white
            ),
        ),
        (
            AxisNameLabel("y"),
            TextCommand(
                axes.y_label, (-15.0, axes.y_range[1] * SCALE + 25.0, 1.0), 24.0, white
            ),
        ),
        (AxisNameLabel("origin"), TextCommand("O", (-15.0, -15.0, 1.0), 18.0, white)),
    ]


def axis_number_labels(axes: Axes) -> list[tuple[AxisLabel, TextCommand]]:
    """Numeric labels for every non-zero tick, relative to the axes."""
    if not axes.show_numbers:
        return []
    labels: list[tuple[AxisLabel, TextCommand]] = []
    for x in _steps(axes.x_range[0], axes.x_range[1], axes.tick_spacing):
        if abs(x) > 0.01:
            text = format_tick_label(x, axes.tick_spacing)
            labels.append(
                (
                    AxisLabel("x", x),
                    TextCommand(text, (x * SCALE, -25.0, 1.0), 14.0, _NUMBER_COLOR),
                )
            )
    for y in _steps(axes.y_range[0], axes.y_range[1], axes.tick_spacing):
        if abs(y) > 0.01:
            text = format_tick_label(y, axes.tick_spacing)
            labels.append(
                (
                    AxisLabel("y", y),
                    TextCommand(text, (-30.0, y * SCALE, 1.0), 14.0, _NUMBER_COLOR),
                )
            )
    return labels


def _offset(text: TextCommand, translation: Vec3) -> TextCommand:
    x, y, z = text.position
    return TextCommand(
        text.text,
        (x + translation[0], y + translation[1], z + translation[2]),
        text.font_size,
        text.color,
    )


def render_scene(world: World, window_size: tuple[float, float]) -> list[DrawCommand]:
    """Collect draw commands for every grid, axes and circle in the world."""
    commands: list[DrawCommand] = []
    texts: list[TextCommand] = []

    for _entity, grid, position, style, visibility, _obj in world.query(
        Grid, Position2D, Style, Visibility, MathObject
    ):
        commands += render_grid(grid, position, style, visibility, window_size)

    for entity, axes, position, style, visibility, _obj in world.query(
        Axes, Position2D, Style, Visibility, MathObject
    ):
        commands += render_axes(axes, position, style, visibility, window_size)
        if _is_hidden(visibility):
            continue
        transform = world.get(entity, Transform) or Transform()
        for _label, text in axis_name_labels(axes) + axis_number_labels(axes):
            texts.append(_offset(text, transform.translation))

    for _entity, circle, transform, visibility in world.query(
        MathCircle, Transform, Visibility
    ):
        commands += render_circle(circle, transform, visibility)

    commands += texts
    return commands