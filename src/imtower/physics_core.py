"""
physics_core.py: The deterministic motion model and stack collision logic.
"""

import enum
import math
from typing import Optional

from .data_models import TowerConfig, Block, ActiveBlock


class Landing(enum.Enum):
    """Outcome of testing a falling block against the stack top."""
    AIRBORNE = "airborne"
    HIT = "hit"
    MISS = "miss"


def sanitize_delta(delta: Optional[float]) -> float:
    """Clamps a frame delta to a finite, non-negative number of seconds."""
    if delta is None:
        return 0.0
    try:
        delta = float(delta)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(delta) or delta <= 0:
        return 0.0
    return delta


def horizontal_overlap(block, target) -> float:
    """Width shared by two rectangles on the x axis (negative when apart)."""
    return min(block.right, target.right) - max(block.x, target.x)


class PhysicsCore:
    """
    Stateless kinematics shared by the session engine.
    All mutation happens on the ActiveBlock passed in.
    """

    def __init__(self, config: Optional[TowerConfig] = None):
        self.config = config or TowerConfig()

    def base_block(self) -> Block:
        """The synthetic base platform at the bottom of every stack."""
        cfg = self.config
        return Block(
            x=(cfg.field_width - cfg.base_width) / 2,
            y=cfg.field_height - cfg.base_offset,
            width=cfg.base_width,
            height=cfg.base_height,
        )

    def spawn_block(self, top: Block, score: int, tag: Optional[str] = None) -> ActiveBlock:
        """New oscillating block centred over the field, just above the stack top."""
        cfg = self.config
        return ActiveBlock(
            x=(cfg.field_width - cfg.block_width) / 2,
            y=top.y - cfg.block_height - cfg.stack_gap,
            width=cfg.block_width,
            height=cfg.block_height,
            speed=cfg.speed_for(score),
            direction=1,
            vy=0.0,
            is_falling=False,
            tag=tag,
        )

    def oscillate(self, block: ActiveBlock, delta: float):
        """Moves a non-falling block sideways and reflects it off the margins."""
        delta = sanitize_delta(delta)
        margin = self.config.edge_margin
        right_limit = self.config.field_width - margin

        block.x += block.speed * block.direction * delta

        if block.x <= margin:
            block.x = margin
            block.direction *= -1
        if block.right >= right_limit:
            block.x = right_limit - block.width
            block.direction *= -1

    def drop(self, block: Optional[ActiveBlock]) -> bool:
        """Starts the fall. Returns False when there was nothing to drop."""
        if block is None or block.is_falling:
            return False
        block.is_falling = True
        block.vy = 0.0
        return True

    def apply_gravity_and_movement(self, y: float, vy: float, delta: float) -> tuple[float, float]:
        """
        Calculates new position and velocity after one step of length delta.
        Velocity is updated first, then used to move the block.
        """
        delta = sanitize_delta(delta)
        vy += self.config.gravity * delta
        y += vy * delta
        return y, vy

    def fall(self, block: ActiveBlock, delta: float):
        block.y, block.vy = self.apply_gravity_and_movement(block.y, block.vy, delta)

    def check_landing(self, block: ActiveBlock, top: Block) -> Landing:
        """Tests a falling block against the topmost stack entry."""
        if block.bottom < top.y:
            return Landing.AIRBORNE
        if horizontal_overlap(block, top) > self.config.overlap_epsilon:
            return Landing.HIT
        return Landing.MISS

    def snap_onto(self, block: ActiveBlock, top: Block) -> Block:
        """Rests the block on the stack top and returns it as a placed block."""
        block.y = top.y - block.height
        block.vy = 0.0
        return block.freeze()

    def has_left_field(self, block: ActiveBlock) -> bool:
        return block.y > self.config.field_height
