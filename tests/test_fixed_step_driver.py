import pytest

from imtower.data_models import RunPhase
from imtower.physics_session import FixedStepDriver


@pytest.fixture
def driver(session):
    session.start()
    return FixedStepDriver(session, step=0.25, max_steps=5)


def test_whole_steps_only(driver, session):
    assert driver.advance(0.75) == 3
    assert session.tick_count == 3
    assert driver.advance(0.125) == 0
    assert driver.advance(0.125) == 1
    assert session.tick_count == 4


def test_fixed_steps_move_block_deterministically(driver, session):
    driver.advance(0.25)
    assert session.active.x == 60 + 30
    driver.advance(0.25)
    # 60 + 60 would cross the right margin at 110
    assert session.active.x == 110
    assert session.active.direction == -1


def test_backlog_beyond_cap_is_discarded(driver, session):
    assert driver.advance(10.0) == 5
    assert driver.accumulator == 0.0
    assert session.tick_count == 5


def test_drop_waits_for_next_tick_boundary(driver, session):
    dropped = session.active
    driver.request_drop()
    driver.advance(0.0)
    assert session.active is dropped
    assert not dropped.is_falling

    # one 0.25 s tick is long enough to fall onto the base and respawn
    driver.advance(0.25)
    assert dropped.is_falling
    assert session.active is not dropped
    assert session.score == 1
    assert driver.pending_drop is False


def test_drop_applies_before_the_tick_it_waited_for(session):
    session.start()
    driver = FixedStepDriver(session, step=1 / 60)
    driver.request_drop()
    driver.advance(1 / 60)
    assert session.active.is_falling
    assert session.active.x == 60
    assert session.score == 0


def test_repeated_requests_collapse_into_one_drop(session):
    session.start()
    driver = FixedStepDriver(session, step=1 / 60)
    for _ in range(3):
        driver.request_drop()
    for _ in range(120):
        driver.advance(1 / 60)
        if session.score:
            break
    assert session.score == 1
    assert not session.active.is_falling
    assert session.phase is RunPhase.RUNNING


def test_reset_clears_pending_input(driver, session):
    driver.request_drop()
    driver.advance(0.1)
    driver.reset()
    driver.advance(0.25)
    assert driver.accumulator == 0.0
    assert not session.active.is_falling


def test_unusable_frame_delta_runs_nothing(driver, session):
    assert driver.advance(None) == 0
    assert driver.advance(-3) == 0
    assert session.tick_count == 0


@pytest.mark.parametrize("kwargs", [{"step": 0}, {"step": -0.1}, {"max_steps": 0}])
def test_invalid_driver_settings(session, kwargs):
    with pytest.raises(ValueError):
        FixedStepDriver(session, **kwargs)
