"""Interactive window: input handling, per-frame updates and drawing."""

from __future__ import annotations

import argparse
import logging
import math
import os
import time
from collections.abc import Callable
from pathlib import Path
from typing import Optional, Sequence, Union

from rimviz.animation import update_animations
from rimviz.axes import Axes, Grid, create_axes_with_labels, create_grid
from rimviz.export import ExportRequest, handle_export_requests
from rimviz.objects import Color, Style, Visibility, World, update_circle_transforms
from rimviz.render import (
    CircleCommand,
    DrawCommand,
    LineCommand,
    TextCommand,
    render_scene,
)
from rimviz.state import (
    CameraState,
    CircleState,
    CoordinateSystemState,
    Level,
    PerformanceState,
    UiVisibility,
    fps_level,
    history_summary,
    screenshot_request,
    usage_level,
    view_range,
)

logger = logging.getLogger(__name__)

WINDOW_TITLE = "RIM - Mathematical Visualization Tool"
DEFAULT_WINDOW_SIZE = (1200.0, 800.0)

_LEVEL_COLORS = {
    Level.GREEN: Color.srgb(0.0, 1.0, 0.0),
    Level.YELLOW: Color.srgb(1.0, 1.0, 0.0),
    Level.RED: Color.srgb(1.0, 0.0, 0.0),
}
_PANEL_TEXT = Color.srgb(0.9, 0.9, 0.9)
_PANEL_FONT = 16.0
_LINE_HEIGHT = 20.0


def setup_coordinate_system(world: World) -> tuple[int, int]:
    """Spawn the background grid and the labelled axes; return (grid, axes)."""
    grid = create_grid(
        world,
        1.0,
        Style(
            stroke_color=Color.srgba(0.3, 0.3, 0.3, 1.0),
            fill_color=None,
            stroke_width=1.0,
            opacity=0.3,
        ),
    )
    axes = create_axes_with_labels(
        world,
        (-10.0, 10.0),
        (-8.0, 8.0),
        "x",
        "y",
        Style(
            stroke_color=Color.WHITE,  # type: ignore[attr-defined]
            fill_color=None,
            stroke_width=2.0,
            opacity=1.0,
        ),
    )
    return grid, axes


def _visibility(shown: bool) -> Visibility:
    return Visibility.INHERITED if shown else Visibility.HIDDEN


def _trend(history: Sequence[float]) -> str:
    return " | ".join(f"{value:.0f}" for value in list(history)[-5:])


class App:
    """The visualisation application, independent of any window until run()."""

    def __init__(
        self,
        window_size: tuple[float, float] = DEFAULT_WINDOW_SIZE,
        base_dir: Union[str, os.PathLike] = ".",
        save_screenshot: Optional[Callable[[Path], object]] = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
        performance: Optional[PerformanceState] = None,
    ) -> None:
        self.window_size = window_size
        self.base_dir = base_dir
        self.world = World()
        self.ui = UiVisibility()
        self.camera = CameraState()
        self.coordinates = CoordinateSystemState()
        self.circles = CircleState()
        self.performance = performance or PerformanceState(wall_clock=wall_clock)
        self.export_requests: list[ExportRequest] = []
        self.pending_screenshots: list[Path] = []
        self._save_screenshot = save_screenshot or self.pending_screenshots.append
        self._clock = clock
        self._wall_clock = wall_clock
        self._axes_dirty = True
        setup_coordinate_system(self.world)

    def handle_key(self, key: str) -> bool:
        """React to a key press named as pygame names keys; return whether it was used."""
        key = key.lower()
        if key == "f1":
            self.ui.toggle()
        elif key == "a":
            shown = self.coordinates.toggle_axes()
            self._set_visibility(Axes, shown)
        elif key == "g":
            shown = self.coordinates.toggle_grid()
            self._set_visibility(Grid, shown)
        elif key == "s":
            self.export_requests.append(screenshot_request(self._wall_clock()))
            logger.info("Screenshot shortcut pressed, request queued")
        elif key == "p":
            self.performance.show_performance = not self.performance.show_performance
            logger.info(
                "Performance panel %s",
                "shown" if self.performance.show_performance else "hidden",
            )
        elif key == "c":
            self.circles.add_circle(self.world)
        elif key in ("backspace", "delete"):
            self.circles.clear(self.world)
        else:
            return False
        return True

    def handle_scroll(self, delta: float) -> float:
        """Zoom by a mouse-wheel amount; return the new target zoom."""
        return self.camera.apply_scroll(delta)

    def update(self, dt: float) -> None:
        """Advance the application by one frame of dt seconds."""
        self.camera.update(dt)
        zoom = self.camera.consume_zoom_change()
        if zoom is not None:
            for _entity, axes in self.world.query(Axes):
                axes.update_for_zoom(zoom)
            for _entity, grid in self.world.query(Grid):
                grid.update_for_zoom(zoom)
            self._axes_dirty = True
        if self._axes_dirty:
            for _entity, axes in self.world.query(Axes):
                axes.refresh_tick_spacing()
            self._axes_dirty = False
        update_animations(self.world, dt)
        update_circle_transforms(self.world)
        self.performance.tick(self._clock())
        handle_export_requests(
            self.export_requests, self._save_screenshot, self.base_dir
        )

    def draw(self) -> list[DrawCommand]:
        """The scene's draw commands followed by the on-screen panels."""
        commands = render_scene(self.world, self.window_size)
        commands += self._hint_panel()
        if self.performance.show_performance:
            commands += self._performance_panel()
        if self.ui.show_ui:
            commands += self._control_panel()
        return commands

    def run(self) -> None:
        """Open a window and run until it is closed."""
        import pygame

        pygame.init()
        try:
            width, height = (int(v) for v in self.window_size)
            screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
            pygame.display.set_caption(WINDOW_TITLE)
            clock = pygame.time.Clock()
            fonts: dict[int, object] = {}
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        self.handle_key(pygame.key.name(event.key))
                    elif event.type == pygame.MOUSEWHEEL:
                        self.handle_scroll(float(event.y))
                    elif event.type == pygame.VIDEORESIZE:
                        self.window_size = (float(event.w), float(event.h))
                dt = clock.tick(60) / 1000.0
                self.update(dt)
                screen.fill((0, 0, 0))
                _paint(pygame, screen, self.draw(), self.window_size, fonts)
                pygame.display.flip()
                for path in self.pending_screenshots:
                    pygame.image.save(screen, str(path))
                    logger.info("Screenshot saved: %s", path)
                self.pending_screenshots.clear()
        finally:
            pygame.quit()

    def _set_visibility(self, kind: type, shown: bool) -> None:
        other = Grid if kind is Axes else Axes
        for entity, _component in self.world.query(kind):
            if self.world.get(entity, other) is None:
                self.world.insert(entity, _visibility(shown))

    def _panel(
        self, left: float, top: float, lines: Sequence[tuple[str, Color]]
    ) -> list[DrawCommand]:
        return [
            TextCommand(text, (left, top - i * _LINE_HEIGHT, 2.0), _PANEL_FONT, color)
            for i, (text, color) in enumerate(lines)
        ]

    def _hint_panel(self) -> list[DrawCommand]:
        width, height = self.window_size
        lines = [
            ("F1 show/hide UI", _PANEL_TEXT),
            (f"Zoom: {self.camera.zoom:.1f}x", _PANEL_TEXT),
            ("Scroll to zoom", _PANEL_TEXT),
            ("P performance", _PANEL_TEXT),
        ]
        return self._panel(width / 2 - 90.0, height / 2 - 20.0, lines)

    def _performance_panel(self) -> list[DrawCommand]:
        width, height = self.window_size
        perf = self.performance
        lines = [
            ("Performance", _PANEL_TEXT),
            (f"FPS: {perf.fps:.1f}", _LEVEL_COLORS[fps_level(perf.fps)]),
            (
                f"Memory: {perf.memory_usage_mb:.1f} MB",
                _LEVEL_COLORS[usage_level(perf.memory_usage_mb, 100.0, 200.0)],
            ),
            (
                f"CPU: {perf.cpu_usage_percent:.1f}%",
                _LEVEL_COLORS[usage_level(perf.cpu_usage_percent, 50.0, 80.0)],
            ),
            ("P to toggle", _PANEL_TEXT),
        ]
        return self._panel(width / 2 - 110.0, height / 2 - 130.0, lines)

    def _control_panel(self) -> list[DrawCommand]:
        width, height = self.window_size
        (x_lo, x_hi), (y_lo, y_hi) = view_range(self.camera.zoom)
        axes_shown = self.coordinates.show_axes
        grid_shown = self.coordinates.show_grid
        lines: list[tuple[str, Color]] = [
            (WINDOW_TITLE, _PANEL_TEXT),
            (f"Current zoom: {self.camera.zoom:.2f}x", _PANEL_TEXT),
            (f"Target zoom: {self.camera.target_zoom:.2f}x", _PANEL_TEXT),
            (f"X: {x_lo:.1f} to {x_hi:.1f}", _PANEL_TEXT),
            (f"Y: {y_lo:.1f} to {y_hi:.1f}", _PANEL_TEXT),
            (f"Axes: {'shown' if axes_shown else 'hidden'}", _PANEL_TEXT),
            (f"Grid: {'shown' if grid_shown else 'hidden'}", _PANEL_TEXT),
            (f"Circles: {len(self.circles.circles)}", _PANEL_TEXT),
        ]
        perf = self.performance
        if perf.fps_history:
            lines += [
                (f"FPS trend: {_trend(perf.fps_history)}", _PANEL_TEXT),
                (f"Memory trend: {_trend(perf.memory_history)}", _PANEL_TEXT),
                (f"CPU trend: {_trend(perf.cpu_history)}", _PANEL_TEXT),
            ]
        for name, history, unit in (
            ("FPS", perf.fps_history, ""),
            ("memory", perf.memory_history, " MB"),
            ("CPU", perf.cpu_history, "%"),
        ):
            summary = history_summary(history)
            if summary is not None:
                lines.append(
                    (
                        f"{name} avg {summary.average:.1f}{unit}, "
                        f"max {summary.maximum:.1f}{unit}, "
                        f"min {summary.minimum:.1f}{unit}",
                        _PANEL_TEXT,
                    )
                )
        lines += [
            ("Shortcuts", _PANEL_TEXT),
            ("F1 - show/hide UI", _PANEL_TEXT),
            ("A - show/hide axes", _PANEL_TEXT),
            ("G - show/hide grid", _PANEL_TEXT),
            ("S - save screenshot", _PANEL_TEXT),
            ("P - show/hide performance", _PANEL_TEXT),
            ("C - add circle, Backspace - clear circles", _PANEL_TEXT),
            ("Mouse wheel - zoom", _PANEL_TEXT),
        ]
        return self._panel(-width / 2 + 10.0, height / 2 - 20.0, lines)


def _rgb(color: Color) -> tuple[int, int, int]:
    # Blend onto the black background, since the display surface has no alpha.
    return tuple(  # type: ignore[return-value]
        max(0, min(255, round(channel * color.alpha * 255)))
        for channel in (color.red, color.green, color.blue)
    )


def _paint(pygame, screen, commands, window_size, fonts) -> None:
    width, height = window_size

    def to_screen(x: float, y: float) -> tuple[float, float]:
        return (width / 2 + x, height / 2 - y)

    for command in commands:
        if isinstance(command, LineCommand):
            pygame.draw.aaline(
                screen,
                _rgb(command.color),
                to_screen(command.start[0], command.start[1]),
                to_screen(command.end[0], command.end[1]),
            )
        elif isinstance(command, CircleCommand):
            cx, cy = to_screen(*command.center)
            segments = command.resolution or 32
            points = [
                (
                    cx + command.radius * math.cos(2 * math.pi * i / segments),
                    cy + command.radius * math.sin(2 * math.pi * i / segments),
                )
                for i in range(segments)
            ]
            pygame.draw.aalines(screen, _rgb(command.color), True, points)
        elif isinstance(command, TextCommand):
            size = int(command.font_size)
            font = fonts.get(size)
            if font is None:
                font = fonts[size] = pygame.font.SysFont(None, size)
            surface = font.render(command.text, True, _rgb(command.color))
            rect = surface.get_rect(center=to_screen(command.position[0], command.position[1]))
            screen.blit(surface, rect)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the interactive viewer."""
    parser = argparse.ArgumentParser(description=WINDOW_TITLE)
    parser.add_argument(
        "--output-dir",
        default=".",
        help="directory under which screenshots/ is created",
    )
    parser.add_argument("--width", type=float, default=DEFAULT_WINDOW_SIZE[0])
    parser.add_argument("--height", type=float, default=DEFAULT_WINDOW_SIZE[1])
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    App(window_size=(args.width, args.height), base_dir=args.output_dir).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())