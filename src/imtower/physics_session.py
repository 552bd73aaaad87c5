"""
physics_session.py: The authoritative game session and its frame driver.
"""

import logging
import random
from typing import List, Optional, Tuple

from .collaborators import ScoreStore, SessionListener, coerce_score
from .constants import BLOCK_TAGS, TICK_TIME, MAX_STEPS_PER_FRAME
from .data_models import TowerConfig, Block, ActiveBlock, RunPhase, RunState
from .physics_core import PhysicsCore, Landing, sanitize_delta
from .score_db import MemoryScoreStore

logger = logging.getLogger(__name__)


class GameSession(PhysicsCore):
    """
    Owns the stack, the active block and the run state.
    Inherits the motion model and collision test from PhysicsCore.
    """

    def __init__(self, config: Optional[TowerConfig] = None,
                 store: Optional[ScoreStore] = None,
                 listener: Optional[SessionListener] = None,
                 rng: Optional[random.Random] = None):
        super().__init__(config)
        self.store = store if store is not None else MemoryScoreStore()
        self.listener = listener if listener is not None else SessionListener()
        self.rng = rng or random.Random()

        self.stack: List[Block] = []
        self.active: Optional[ActiveBlock] = None
        self.run = RunState(best_score=self._load_best())
        self.tick_count = 0

    # ---------- Read-only views ----------
    @property
    def phase(self) -> RunPhase:
        return self.run.phase

    @property
    def score(self) -> int:
        return self.run.score

    @property
    def best_score(self) -> int:
        return self.run.best_score

    @property
    def top(self) -> Block:
        return self.stack[-1]

    def stack_snapshot(self) -> Tuple[Block, ...]:
        return tuple(self.stack)

    def active_snapshot(self) -> Optional[ActiveBlock]:
        return self.active.copy() if self.active else None

    def to_client_state(self):
        """Prepares a minimal state dictionary for a renderer or a log line."""
        state = self.run.to_client_state()
        state["tick"] = self.tick_count
        state["stack"] = [block.to_render_state() for block in self.stack]
        state["active"] = self.active.freeze().to_render_state() if self.active else None
        return state

    # ---------- Lifecycle ----------
    def start(self):
        """Begins a fresh run: base-only stack, score 0, new active block."""
        self.stack = [self.base_block()]
        self.run.reset()
        self.tick_count = 0
        self._spawn()
        logger.info(f"Run started (best {self.run.best_score}).")
        self.listener.on_score_changed(self.run.score)

    # Restart and "return to start" are the same full reset.
    restart = start
    return_to_start = start

    def trigger_drop(self) -> bool:
        """Input entry point. Silently ignored unless a block is oscillating."""
        if self.run.phase is not RunPhase.RUNNING:
            logger.debug(f"Drop ignored in phase {self.run.phase.value}.")
            return False
        if not self.drop(self.active):
            logger.debug("Drop ignored: no oscillating block.")
            return False
        return True

    def tick(self, delta: Optional[float]):
        """
        One simulation step: motion, then the placement test, then respawn.
        Does nothing outside a running run.
        """
        if self.run.phase is not RunPhase.RUNNING or self.active is None:
            return
        delta = sanitize_delta(delta)
        self.tick_count += 1
        block = self.active

        if not block.is_falling:
            self.oscillate(block, delta)
            return

        self.fall(block, delta)
        top = self.top
        if self.check_landing(block, top) is Landing.HIT:
            self._place(block, top)
            return

        if self.has_left_field(block):
            self._game_over()

    # ---------- Internal transitions ----------
    def _spawn(self):
        tag = self.rng.choice(BLOCK_TAGS) if BLOCK_TAGS else None
        self.active = self.spawn_block(self.top, self.run.score, tag)

    def _place(self, block: ActiveBlock, top: Block):
        placed = self.snap_onto(block, top)
        self.stack.append(placed)
        self.run.score += 1
        logger.debug(f"Placed block at x={placed.x:.1f}, y={placed.y:.1f} (score {self.run.score}).")

        if self.run.score > self.run.best_score:
            self.run.best_score = self.run.score
            self.store.save_best(self.run.best_score)
            logger.info(f"New best score: {self.run.best_score}")

        self.listener.on_score_changed(self.run.score)
        self._spawn()

    def _game_over(self):
        self.run.phase = RunPhase.OVER
        logger.info(f"Game over. Final score: {self.run.score}")
        self.listener.on_game_over()

    def _load_best(self) -> int:
        try:
            value = self.store.load_best()
        except ValueError as e:
            logger.warning(f"Could not read best score: {e}")
            return 0
        return coerce_score(value)


class FixedStepDriver:
    """
    Feeds variable frame times into a session as fixed-length ticks.
    Drops requested between ticks are applied at the next tick boundary.
    """

    def __init__(self, session: GameSession, step: float = TICK_TIME,
                 max_steps: int = MAX_STEPS_PER_FRAME):
        if step <= 0:
            raise ValueError(f"step must be positive, got {step!r}")
        if max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {max_steps!r}")
        self.session = session
        self.step = step
        self.max_steps = max_steps
        self.accumulator = 0.0
        self.pending_drop = False

    def request_drop(self):
        self.pending_drop = True

    def reset(self):
        self.accumulator = 0.0
        self.pending_drop = False

    def advance(self, frame_delta: Optional[float]) -> int:
        """Runs as many whole ticks as the elapsed time allows. Returns the count."""
        self.accumulator += sanitize_delta(frame_delta)
        steps = 0
        while self.accumulator >= self.step:
            if steps >= self.max_steps:
                logger.debug(f"Dropping {self.accumulator:.3f}s of simulation backlog.")
                self.accumulator = 0.0
                break
            self.accumulator -= self.step
            if self.pending_drop:
                self.pending_drop = False
                self.session.trigger_drop()
            self.session.tick(self.step)
            steps += 1
        return steps
