"""
imtower: a tower-stacking arcade game built around a deterministic engine.
"""

from .data_models import TowerConfig, Block, ActiveBlock, RunPhase, RunState
from .physics_session import GameSession, FixedStepDriver

__all__ = [
    "TowerConfig", "Block", "ActiveBlock", "RunPhase", "RunState",
    "GameSession", "FixedStepDriver",
]
