"""Core scene objects, styles and a small entity-component world."""

from __future__ import annotations

import itertools
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Iterator, Optional, TypeVar

T = TypeVar("T")

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class Color:
    """An sRGB colour with alpha, each channel in 0..1."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def srgb(cls, red: float, green: float, blue: float) -> "Color":
        return cls(red, green, blue, 1.0)

    @classmethod
    def srgba(cls, red: float, green: float, blue: float, alpha: float) -> "Color":
        return cls(red, green, blue, alpha)

    def with_alpha(self, alpha: float) -> "Color":
        """Return the same colour with a different alpha."""
        return Color(self.red, self.green, self.blue, alpha)


Color.WHITE = Color(1.0, 1.0, 1.0, 1.0)  # type: ignore[attr-defined]
Color.BLACK = Color(0.0, 0.0, 0.0, 1.0)  # type: ignore[attr-defined]


class Visibility(Enum):
    INHERITED = auto()
    HIDDEN = auto()
    VISIBLE = auto()


@dataclass
class Transform:
    translation: Vec3 = (0.0, 0.0, 0.0)


@dataclass
class MathObject:
    """Base data every mathematical object carries."""

    id: str
    visible: bool = True
    layer: int = 0


@dataclass
class Position2D:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_vec(cls, vec: Vec2) -> "Position2D":
        return cls(float(vec[0]), float(vec[1]))

    def as_vec(self) -> Vec2:
        return (self.x, self.y)


@dataclass
class Style:
    stroke_color: Color = Color.WHITE  # type: ignore[attr-defined]
    fill_color: Optional[Color] = None
    stroke_width: float = 2.0
    opacity: float = 1.0


class MathObjectType(Enum):
    CIRCLE = auto()
    LINE = auto()
    RECTANGLE = auto()
    FUNCTION_GRAPH = auto()
    AXES = auto()
    TEXT = auto()


@dataclass
class MathCircle:
    radius: float = 1.0
    color: Color = Color.WHITE  # type: ignore[attr-defined]
    filled: bool = True
    resolution: Optional[int] = None
    """Number of segments; None selects one automatically."""


@dataclass
class Line:
    start: Vec2
    end: Vec2


@dataclass
class Rectangle:
    width: float = 2.0
    height: float = 1.0


@dataclass
class MathScene:
    name: str = "Default Scene"
    active: bool = True
    background_color: Color = Color.BLACK  # type: ignore[attr-defined]


@dataclass
class World:
    """A minimal store of entities, each a set of components keyed by type."""

    _entities: dict[int, dict[type, Any]] = field(default_factory=dict)
    _ids: Iterator[int] = field(default_factory=itertools.count)

    def spawn(self, *args: Any) -> int:
        """Create an entity holding the given components and return its id."""
        components: dict[type, Any] = {}
        for component in args:
            kind = type(component)
            if kind in components:
                raise ValueError(f"duplicate component of type {kind.__name__}")
            components[kind] = component
        entity = next(self._ids)
        self._entities[entity] = components
        return entity

    def insert(self, entity: int, component: Any) -> None:
        """Add or replace a component on an existing entity."""
        self._components(entity)[type(component)] = component

    def despawn(self, entity: int) -> None:
        if entity not in self._entities:
            raise KeyError(entity)
        del self._entities[entity]

    def get(self, entity: int, component_type: type[T]) -> Optional[T]:
        """Return the entity's component of the given type, or None."""
        return self._components(entity).get(component_type)

    def query(self, *args: type) -> Iterator[tuple]:
        """Yield (entity, *components) for entities holding every given type."""
        if not args:
            raise TypeError("query needs at least one component type")
        for entity, components in list(self._entities.items()):
            if all(kind in components for kind in args):
                yield (entity, *(components[kind] for kind in args))

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def _components(self, entity: int) -> dict[type, Any]:
        try:
            return self._entities[entity]
        except KeyError:
            raise KeyError(entity) from None


def _object_id(prefix: str) -> str:
    return f"{prefix}_{random.getrandbits(32)}"


def create_circle(world: World, position: Vec2, radius: float, style: Style) -> int:
    """Spawn a circle with automatic resolution."""
    return create_circle_with_resolution(world, position, radius, style, None)


def create_circle_with_resolution(
    world: World,
    position: Vec2,
    radius: float,
    style: Style,
    resolution: Optional[int],
) -> int:
    """Spawn a circle drawn with the given number of segments (None for automatic)."""
    x, y = float(position[0]), float(position[1])
    return world.spawn(
        MathObject(id=_object_id("circle"), visible=True, layer=0),
        MathCircle(
            radius=radius,
            color=style.stroke_color,
            filled=style.fill_color is not None,
            resolution=resolution,
        ),
        Position2D(x, y),
        style,
        Transform(translation=(x, y, 0.0)),
        Visibility.VISIBLE,
    )


def create_line(world: World, start: Vec2, end: Vec2, style: Style) -> int:
    """Spawn a line segment positioned at its midpoint."""
    mid = ((start[0] + end[0]) * 0.5, (start[1] + end[1]) * 0.5)
    return world.spawn(
        MathObject(id=_object_id("line"), visible=True, layer=0),
        Line(start=tuple(start), end=tuple(end)),
        Position2D.from_vec(mid),
        style,
        Transform(translation=(mid[0], mid[1], 0.0)),
        Visibility.VISIBLE,
    )


def update_circle_transforms(world: World) -> None:
    """Move every circle's transform to its logical position."""
    for _entity, _circle, position, transform in world.query(
        MathCircle, Position2D, Transform
    ):
        transform.translation = (position.x, position.y, 0.0)