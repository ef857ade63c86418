"""Time-based animation state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from rimviz.objects import World


class AnimationType(Enum):
    TRANSFORM = auto()
    FADE = auto()
    DRAW = auto()
    WRITE = auto()
    MORPH = auto()


@dataclass
class MathAnimation:
    duration: float = 1.0
    elapsed: float = 0.0
    is_playing: bool = False
    loop_animation: bool = False

    def advance(self, dt: float) -> None:
        """Move a playing animation forward by dt seconds."""
        if not self.is_playing:
            return
        self.elapsed += dt
        if self.elapsed >= self.duration:
            if self.loop_animation:
                self.elapsed = 0.0
            else:
                self.is_playing = False


def update_animations(world: World, dt: float) -> None:
    """Advance every animation in the world by dt seconds."""
    for _entity, animation in world.query(MathAnimation):
        animation.advance(dt)