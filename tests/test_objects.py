import pytest

from rimviz.objects import (
    Color,
    Line,
    MathCircle,
    MathObject,
    MathScene,
    Position2D,
    Rectangle,
    Style,
    Transform,
    Visibility,
    World,
    create_circle,
    create_circle_with_resolution,
    create_line,
    update_circle_transforms,
)


def test_color_with_alpha_keeps_rgb():
    base = Color.srgb(0.2, 0.8, 0.2)
    faded = base.with_alpha(0.3)
    assert (faded.red, faded.green, faded.blue) == (0.2, 0.8, 0.2)
    assert faded.alpha == 0.3
    assert base.alpha == 1.0


def test_position_round_trip():
    pos = Position2D.from_vec((1.5, -2.5))
    assert pos.as_vec() == (1.5, -2.5)
    assert Position2D.from_vec(pos.as_vec()) == pos


def test_defaults_follow_source():
    assert MathScene().name == "Default Scene"
    assert MathScene().background_color == Color.BLACK
    assert Style().stroke_width == 2.0
    assert Style().fill_color is None
    assert Rectangle() == Rectangle(width=2.0, height=1.0)
    assert MathCircle().resolution is None


def test_world_spawn_get_and_despawn():
    world = World()
    entity = world.spawn(Position2D(1.0, 2.0), Transform())
    assert world.get(entity, Position2D) == Position2D(1.0, 2.0)
    assert world.get(entity, Style) is None
    world.despawn(entity)
    assert entity not in world
    with pytest.raises(KeyError):
        world.despawn(entity)
    with pytest.raises(KeyError):
        world.get(entity, Position2D)


def test_world_rejects_duplicate_components():
    with pytest.raises(ValueError):
        World().spawn(Position2D(), Position2D())


def test_world_insert_replaces_component():
    world = World()
    entity = world.spawn(Position2D(0.0, 0.0))
    world.insert(entity, Position2D(3.0, 4.0))
    assert world.get(entity, Position2D) == Position2D(3.0, 4.0)


def test_world_query_filters_by_all_types():
    world = World()
    a = world.spawn(Position2D(), Transform())
    world.spawn(Position2D())
    results = list(world.query(Position2D, Transform))
    assert [row[0] for row in results] == [a]
    assert len(list(world.query(Position2D))) == 2
    with pytest.raises(TypeError):
        list(world.query())


def test_create_circle_components():
    world = World()
    style = Style()
    entity = create_circle(world, (1.0, -2.0), 0.5, style)
    circle = world.get(entity, MathCircle)
    assert circle.radius == 0.5
    assert circle.filled is False
    assert circle.resolution is None
    assert circle.color == style.stroke_color
    assert world.get(entity, Transform).translation == (1.0, -2.0, 0.0)
    assert world.get(entity, Visibility) is Visibility.VISIBLE
    obj = world.get(entity, MathObject)
    assert obj.id.startswith("circle_")
    assert obj.layer == 0


def test_create_circle_with_resolution_and_fill():
    world = World()
    style = Style(fill_color=Color.srgba(0.1, 0.2, 0.3, 0.3))
    entity = create_circle_with_resolution(world, (0.0, 0.0), 1.0, style, 64)
    circle = world.get(entity, MathCircle)
    assert circle.filled is True
    assert circle.resolution == 64


def test_create_line_positioned_at_midpoint():
    world = World()
    entity = create_line(world, (0.0, 0.0), (2.0, 4.0), Style())
    assert world.get(entity, Line) == Line(start=(0.0, 0.0), end=(2.0, 4.0))
    assert world.get(entity, Position2D).as_vec() == (1.0, 2.0)
    assert world.get(entity, Transform).translation == (1.0, 2.0, 0.0)
    assert world.get(entity, MathObject).id.startswith("line_")


def test_update_circle_transforms_follows_position():
    world = World()
    entity = create_circle(world, (0.0, 0.0), 1.0, Style())
    world.insert(entity, Position2D(3.0, -1.0))
    update_circle_transforms(world)
    assert world.get(entity, Transform).translation == (3.0, -1.0, 0.0)