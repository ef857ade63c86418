"""Sampled function graphs, parametric curves and common functions."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Callable, Iterator

from rimviz.objects import MathObject, Position2D, Style, Transform, World

MathFunction = Callable[[float], float]

_DEFAULT_SAMPLES = 100


def _parameters(start: float, end: float, count: int) -> Iterator[float]:
    if count == 0:
        return
    if count < 2:
        raise ValueError("sample_count must be at least 2")
    for i in range(count):
        yield start + (i / (count - 1)) * (end - start)


@dataclass
class FunctionGraph:
    domain_start: float = -5.0
    domain_end: float = 5.0
    sample_count: int = _DEFAULT_SAMPLES
    points: list[tuple[float, float]] = field(default_factory=list)

    def resample(self) -> None:
        """Fill an empty graph with samples of y = x over its domain."""
        if self.points:
            return
        self.points = [
            (x, x)
            for x in _parameters(self.domain_start, self.domain_end, self.sample_count)
        ]


@dataclass
class ParametricCurve:
    param_start: float = 0.0
    param_end: float = 1.0
    sample_count: int = _DEFAULT_SAMPLES
    points: list[tuple[float, float]] = field(default_factory=list)


def _object_id(prefix: str) -> str:
    return f"{prefix}_{random.getrandbits(32)}"


def create_function_graph(
    world: World,
    func: MathFunction,
    domain: tuple[float, float],
    style: Style,
) -> int:
    """Sample func over domain and spawn the resulting graph."""
    graph = FunctionGraph(domain_start=domain[0], domain_end=domain[1])
    graph.points = [
        (x, func(x))
        for x in _parameters(graph.domain_start, graph.domain_end, graph.sample_count)
    ]
    return world.spawn(
        MathObject(id=_object_id("function"), visible=True, layer=0),
        graph,
        Position2D(0.0, 0.0),
        style,
        Transform(),
    )


def create_parametric_curve(
    world: World,
    x_func: MathFunction,
    y_func: MathFunction,
    param_range: tuple[float, float],
    style: Style,
) -> int:
    """Sample (x_func(t), y_func(t)) over param_range and spawn the curve."""
    curve = ParametricCurve(param_start=param_range[0], param_end=param_range[1])
    curve.points = [
        (x_func(t), y_func(t))
        for t in _parameters(curve.param_start, curve.param_end, curve.sample_count)
    ]
    return world.spawn(
        MathObject(id=_object_id("curve"), visible=True, layer=0),
        curve,
        Position2D(0.0, 0.0),
        style,
        Transform(),
    )


def sin(x: float) -> float:
    return math.sin(x)


def cos(x: float) -> float:
    return math.cos(x)


def quadratic(a: float, b: float, c: float) -> MathFunction:
    """Return the function x -> a*x^2 + b*x + c."""

    def evaluate(x: float) -> float:
        return a * x * x + b * x + c

    return evaluate


def exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def ln(x: float) -> float:
    """Natural logarithm; NaN outside the positive reals."""
    if x > 0.0:
        return math.log(x)
    return math.nan