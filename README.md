# rimviz

An interactive viewer for mathematics on screen. It draws a coordinate
system of axes with numbered ticks and a major/minor grid. You can add
circles, zoom with the mouse wheel, watch a performance overlay and save
screenshots. The scene objects and the drawing logic can also be used as a
library that does not depend on any window.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
rimviz
```

Options:

| Option             | Default | Meaning                                          |
|--------------------|---------|--------------------------------------------------|
| `--output-dir DIR` | `.`     | directory under which `screenshots/` is created  |
| `--width W`        | 1200    | initial window width in pixels                   |
| `--height H`       | 800     | initial window height in pixels                  |

The window opens with a grid and with axes running from -10 to 10 on x and
from -8 to 8 on y. The origin is at the centre of the window. The window can
be resized.

### Keys

| Key                  | Action                                          |
|----------------------|-------------------------------------------------|
| F1                   | show or hide the control panel                  |
| A                    | show or hide the axes                           |
| G                    | show or hide the grid                           |
| S                    | save a screenshot to `screenshots/`             |
| P                    | show or hide the performance overlay            |
| C                    | add a circle                                    |
| Backspace / Delete   | remove all added circles                        |
| Mouse wheel          | zoom in or out (between 0.1x and 10x)           |

The zoom eases smoothly towards its target. As it changes, the axis ranges,
the tick spacing and the grid spacing adapt to the visible range. New
circles start at the origin. Each one after that is placed 2 units to the
right, wrapping to the next row after x = 8 and back to y = -6 after y = 6.
Screenshots are named `rim_screenshot_<unix seconds>.png`.

The performance overlay shows frames per second and CPU use (from
`psutil`). It also shows a memory figure, which is a simulated value that
varies with the clock, not a measurement. Each figure is coloured green,
yellow or red by threshold. The control panel shows the zoom, the visible
range, what is shown or hidden, the circle count, and the recent trend and
the average/max/min of the performance history.

## Using it as a library

The scene lives in a `World` of entities, each holding components. The
`create_*` helpers add ready-made objects to it:

```python
from rimviz.objects import World, Style, Color, create_circle
from rimviz.axes import create_axes_with_labels, create_grid
from rimviz.function_graph import create_function_graph, sin
from rimviz.render import render_scene

world = World()
create_grid(world, 1.0, Style(stroke_color=Color(0.3, 0.3, 0.3), opacity=0.3))
create_axes_with_labels(world, (-10.0, 10.0), (-8.0, 8.0), "x", "y", Style(stroke_width=2.0))
create_circle(world, (1.0, 2.0), 1.5, Style())
graph = create_function_graph(world, sin, (-5.0, 5.0), Style())

commands = render_scene(world, (1200, 800))
```

The modules:

- `rimviz.objects`: `World` (`spawn`, `insert`, `despawn`, `get`, `query`),
  `Color`, `Style`, `Position2D`, `Transform`, `Visibility`, `MathCircle`,
  `Line`, `Rectangle`, `MathScene`, and `create_circle`,
  `create_circle_with_resolution`, `create_line`.
- `rimviz.axes`: `Axes` and `Grid`, with their zoom-dependent spacing, and
  `create_axes`, `create_axes_with_labels`, `create_grid`.
- `rimviz.function_graph`: `create_function_graph` and
  `create_parametric_curve`, which sample 100 points, and the helpers `sin`,
  `cos`, `exp`, `ln` (NaN for x <= 0) and `quadratic(a, b, c)`.
- `rimviz.animation`: `MathAnimation` and `update_animations(world, dt)`,
  which advance playing animations and loop or stop them at their duration.
- `rimviz.render`: `render_scene` and the per-object functions
  `render_axes`, `render_grid` and `render_circle`. They return plain
  `LineCommand`, `CircleCommand` and `TextCommand` values in a coordinate
  system centred on the origin, at 50 pixels per unit, that any drawing back
  end can consume.
- `rimviz.export`: `ExportRequest`, `ExportFormat`, `request_png_screenshot`
  and `handle_export_requests`. The last drains a request queue and passes
  each PNG path under `screenshots/` to a callback you supply.
- `rimviz.state`: the viewer's state objects (`CameraState`, `CircleState`,
  `PerformanceState` and others) and the rating helpers `fps_level` and
  `usage_level`.
- `rimviz.app`: `App`, which handles keys, scrolling, per-frame updates and
  drawing. `App.run()` opens the pygame window.

## What it does not do

- `render_scene` draws grids, axes with their labels, and circles only.
  Function graphs, parametric curves, lines and rectangles are stored in the
  world, but they are not drawn, and the viewer has no way to add them.
- Only PNG screenshots are produced. SVG, GIF and MP4 requests only log a
  warning.
- Animations can be created and advanced in code, but the viewer has no
  controls for playing them.
- Scenes cannot be saved or loaded.