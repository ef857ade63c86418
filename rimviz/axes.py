"""Coordinate axes and background grid."""

from __future__ import annotations

import random
from dataclasses import dataclass

from rimviz.objects import MathObject, Position2D, Style, Transform, Visibility, World


@dataclass
class Axes:
    x_range: tuple[float, float] = (-10.0, 10.0)
    y_range: tuple[float, float] = (-10.0, 10.0)
    show_numbers: bool = True
    tick_spacing: float = 1.0
    x_label: str = "x"
    y_label: str = "y"
    show_arrows: bool = True
    base_range: tuple[float, float] = (20.0, 20.0)
    """Unzoomed width and height, used for zoom calculations."""

    def calculate_tick_spacing(self, zoom: float) -> float:
        """Pick a tick spacing suited to the visible range at this zoom."""
        base_spacing = 1.0
        effective_range = self.base_range[0] / zoom
        if effective_range > 100.0:
            return base_spacing * 10.0
        if effective_range > 50.0:
            return base_spacing * 5.0
        if effective_range > 20.0:
            return base_spacing * 2.0
        if effective_range > 10.0:
            return base_spacing
        if effective_range > 5.0:
            return base_spacing * 0.5
        if effective_range > 2.0:
            return base_spacing * 0.2
        return base_spacing * 0.1

    def update_for_zoom(self, zoom: float) -> None:
        """Recompute the visible ranges and tick spacing for a zoom level."""
        half_width = self.base_range[0] / (2.0 * zoom)
        half_height = self.base_range[1] / (2.0 * zoom)
        self.x_range = (-half_width, half_width)
        self.y_range = (-half_height, half_height)
        self.tick_spacing = self.calculate_tick_spacing(zoom)

    def refresh_tick_spacing(self) -> None:
        """Choose the tick spacing from the larger of the current spans."""
        x_span = self.x_range[1] - self.x_range[0]
        y_span = self.y_range[1] - self.y_range[0]
        max_span = max(x_span, y_span)
        if max_span > 50.0:
            self.tick_spacing = 10.0
        elif max_span > 20.0:
            self.tick_spacing = 5.0
        elif max_span > 10.0:
            self.tick_spacing = 2.0
        else:
            self.tick_spacing = 1.0


@dataclass
class Grid:
    spacing: float = 1.0
    opacity: float = 0.3
    show_minor_grid: bool = True
    minor_spacing: float = 0.2
    base_spacing: float = 1.0

    def update_for_zoom(self, zoom: float) -> None:
        """Adjust major and minor spacing for a zoom level."""
        if zoom > 5.0:
            factor = 0.2
        elif zoom > 2.0:
            factor = 0.5
        elif zoom > 0.5:
            factor = 1.0
        elif zoom > 0.2:
            factor = 2.0
        else:
            factor = 5.0
        self.spacing = self.base_spacing * factor
        self.minor_spacing = self.spacing * 0.2


def _object_id(prefix: str) -> str:
    return f"{prefix}_{random.getrandbits(32)}"


def create_axes(
    world: World,
    x_range: tuple[float, float],
    y_range: tuple[float, float],
    style: Style,
) -> int:
    """Spawn axes labelled x and y."""
    return create_axes_with_labels(world, x_range, y_range, "x", "y", style)


def create_axes_with_labels(
    world: World,
    x_range: tuple[float, float],
    y_range: tuple[float, float],
    x_label: str,
    y_label: str,
    style: Style,
) -> int:
    """Spawn axes with custom axis labels."""
    axes = Axes(
        x_range=tuple(x_range),
        y_range=tuple(y_range),
        show_numbers=True,
        tick_spacing=1.0,
        x_label=x_label,
        y_label=y_label,
        show_arrows=True,
        base_range=(abs(x_range[1] - x_range[0]), abs(y_range[1] - y_range[0])),
    )
    return world.spawn(
        MathObject(id=_object_id("axes"), visible=True, layer=-1),
        axes,
        Position2D(0.0, 0.0),
        style,
        Transform(),
        Visibility.INHERITED,
    )


def create_grid(world: World, spacing: float, style: Style) -> int:
    """Spawn a grid with the given major spacing."""
    return world.spawn(
        MathObject(id=_object_id("grid"), visible=True, layer=-2),
        Grid(
            spacing=spacing,
            opacity=0.3,
            show_minor_grid=True,
            minor_spacing=spacing / 5.0,
            base_spacing=spacing,
        ),
        Position2D(0.0, 0.0),
        style,
        Transform(),
        Visibility.INHERITED,
    )