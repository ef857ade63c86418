import math

import pytest

from rimviz.function_graph import (
    FunctionGraph,
    ParametricCurve,
    cos,
    create_function_graph,
    create_parametric_curve,
    exp,
    ln,
    quadratic,
    sin,
)
from rimviz.objects import MathObject, Style, World


def test_function_graph_samples_domain():
    world = World()
    entity = create_function_graph(world, lambda x: 2 * x, (-1.0, 1.0), Style())
    graph = world.get(entity, FunctionGraph)
    assert len(graph.points) == graph.sample_count == 100
    assert graph.points[0][0] == pytest.approx(-1.0)
    assert graph.points[-1][0] == pytest.approx(1.0)
    assert all(y == pytest.approx(2 * x) for x, y in graph.points)
    xs = [x for x, _ in graph.points]
    assert xs == sorted(xs)
    assert world.get(entity, MathObject).id.startswith("function_")


def test_parametric_curve_circle():
    world = World()
    entity = create_parametric_curve(world, cos, sin, (0.0, 2 * math.pi), Style())
    curve = world.get(entity, ParametricCurve)
    assert len(curve.points) == 100
    assert all(x * x + y * y == pytest.approx(1.0) for x, y in curve.points)
    assert curve.points[0] == pytest.approx(curve.points[-1], abs=1e-9)
    assert world.get(entity, MathObject).id.startswith("curve_")


def test_resample_fills_identity_when_empty():
    graph = FunctionGraph()
    graph.resample()
    assert len(graph.points) == graph.sample_count
    assert all(x == y for x, y in graph.points)
    assert graph.points[0][0] == pytest.approx(graph.domain_start)
    assert graph.points[-1][0] == pytest.approx(graph.domain_end)


def test_resample_keeps_existing_points():
    graph = FunctionGraph(points=[(0.0, 5.0)])
    graph.resample()
    assert graph.points == [(0.0, 5.0)]


def test_resample_rejects_single_sample():
    graph = FunctionGraph(sample_count=1)
    with pytest.raises(ValueError):
        graph.resample()


def test_common_functions():
    assert sin(0.0) == 0.0
    assert cos(0.0) == 1.0
    assert exp(0.0) == 1.0
    assert exp(1000.0) == math.inf
    assert ln(math.e) == pytest.approx(1.0)
    assert math.isnan(ln(0.0))
    assert math.isnan(ln(-1.0))


def test_quadratic_closure():
    f = quadratic(1.0, 0.0, 0.0)
    assert f(3.0) == 9.0
    g = quadratic(0.0, 0.0, 7.0)
    assert g(123.0) == 7.0