"""
data_models.py: Data structures for the game state.
"""

import enum
import math
from dataclasses import dataclass, replace
from typing import Optional

from .constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, EDGE_MARGIN,
    BASE_WIDTH, BASE_HEIGHT, BASE_OFFSET,
    BLOCK_WIDTH, BLOCK_HEIGHT, STACK_GAP, OVERLAP_EPSILON,
    BASE_SPEED, SPEED_INCREASE, GRAVITY
)


@dataclass(frozen=True)
class TowerConfig:
    """Per-session tuning values. Defaults come from constants.py."""
    field_width: float = SCREEN_WIDTH
    field_height: float = SCREEN_HEIGHT
    edge_margin: float = EDGE_MARGIN
    base_width: float = BASE_WIDTH
    base_height: float = BASE_HEIGHT
    base_offset: float = BASE_OFFSET
    block_width: float = BLOCK_WIDTH
    block_height: float = BLOCK_HEIGHT
    stack_gap: float = STACK_GAP
    overlap_epsilon: float = OVERLAP_EPSILON
    base_speed: float = BASE_SPEED
    speed_increase: float = SPEED_INCREASE
    gravity: float = GRAVITY

    def __post_init__(self):
        for name in ("field_width", "field_height", "base_width", "base_height",
                     "block_width", "block_height"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a positive number, got {value!r}")
        for name in ("edge_margin", "base_offset", "stack_gap", "overlap_epsilon",
                     "base_speed", "speed_increase", "gravity"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a non-negative number, got {value!r}")
        if self.block_width + 2 * self.edge_margin > self.field_width:
            raise ValueError("field_width is too narrow for a block and both margins")
        if self.base_offset > self.field_height:
            raise ValueError("base_offset places the base outside the field")

    def speed_for(self, score: int) -> float:
        """Oscillation speed of a block spawned at the given score."""
        return self.base_speed + score * self.speed_increase


@dataclass(frozen=True)
class Block:
    """A placed block. Immutable once committed to the stack."""
    x: float
    y: float
    width: float
    height: float
    tag: Optional[str] = None

    @property
    def right(self) -> float:
        return self.x + self.width

    def to_render_state(self):
        """Prepares a minimal state dictionary for a renderer."""
        return {
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "w": self.width,
            "h": self.height,
            "tag": self.tag,
        }


@dataclass
class ActiveBlock:
    """The single block under player control (oscillating or falling)."""
    x: float
    y: float
    width: float
    height: float
    speed: float
    direction: int = 1
    vy: float = 0.0
    is_falling: bool = False
    tag: Optional[str] = None

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def freeze(self) -> Block:
        """The placed block for the current position and size."""
        return Block(self.x, self.y, self.width, self.height, self.tag)

    def copy(self) -> "ActiveBlock":
        return replace(self)


class RunPhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    OVER = "over"


@dataclass
class RunState:
    """Score bookkeeping and lifecycle phase of the current run."""
    score: int = 0
    best_score: int = 0
    phase: RunPhase = RunPhase.IDLE

    def reset(self):
        self.score = 0
        self.phase = RunPhase.RUNNING

    def to_client_state(self):
        return {
            "score": self.score,
            "best": self.best_score,
            "phase": self.phase.value,
        }
