import random

import pytest

from imtower.collaborators import SessionListener
from imtower.data_models import TowerConfig
from imtower.physics_session import GameSession
from imtower.score_db import MemoryScoreStore


class RecordingListener(SessionListener):
    def __init__(self):
        self.events = []

    def on_score_changed(self, score):
        self.events.append(("score", score))

    def on_game_over(self):
        self.events.append(("over",))


@pytest.fixture
def narrow_config():
    # Spawned blocks sit at x=60, matching the classic 60/80 overlap examples.
    return TowerConfig(field_width=200, field_height=640)


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def store():
    return MemoryScoreStore()


@pytest.fixture
def session(narrow_config, store, listener):
    return GameSession(narrow_config, store=store, listener=listener, rng=random.Random(7))


def settle(session, dt=1 / 60, limit=600):
    """Ticks until the current block is placed or the run ends."""
    block = session.active
    for _ in range(limit):
        session.tick(dt)
        if session.active is not block or session.phase.value == "over":
            return
    raise AssertionError("block never settled")


def place_centered(session):
    """Drops the freshly spawned (centred) block straight onto the stack."""
    assert session.trigger_drop()
    settle(session)
