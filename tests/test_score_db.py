import sqlite3

import pytest

from imtower.data_models import TowerConfig
from imtower.physics_session import GameSession
from imtower.score_db import Database, MemoryScoreStore

from conftest import place_centered


def test_fresh_database_has_no_best(tmp_path):
    db = Database(str(tmp_path / "scores.db"))
    assert db.load_best() == 0
    db.close()


def test_save_never_lowers_best(tmp_path):
    db = Database(str(tmp_path / "scores.db"))
    db.save_best(5)
    db.save_best(3)
    assert db.load_best() == 5
    db.save_best(8)
    assert db.load_best() == 8
    db.close()


def test_best_survives_reopen(tmp_path):
    path = str(tmp_path / "scores.db")
    db = Database(path)
    db.save_best(12)
    db.close()

    reopened = Database(path)
    assert reopened.load_best() == 12
    reopened.close()


def test_profiles_are_independent(tmp_path):
    path = str(tmp_path / "scores.db")
    alice = Database(path, profile="alice")
    bob = Database(path, profile="bob")
    alice.save_best(4)
    assert bob.load_best() == 0
    assert alice.load_best() == 4
    alice.close()
    bob.close()


def test_malformed_row_reads_as_zero(tmp_path):
    db = Database(str(tmp_path / "scores.db"))
    db.cur.execute("INSERT INTO BestScores (profile, best) VALUES (?, ?)", (db.profile, "lots"))
    db.conn.commit()
    assert db.load_best() == 0

    db.save_best(2)
    assert db.load_best() == 2
    db.close()


def test_session_persists_new_best(tmp_path):
    path = str(tmp_path / "scores.db")
    db = Database(path)
    session = GameSession(TowerConfig(field_width=200), store=db)
    session.start()
    place_centered(session)
    place_centered(session)
    db.close()

    reopened = Database(path)
    assert GameSession(store=reopened).best_score == 2
    reopened.close()


def test_memory_store_counts_saves():
    store = MemoryScoreStore()
    store.save_best(1)
    store.save_best(2)
    assert store.load_best() == 2
    assert store.saves == 2


def test_infinite_row_reads_as_zero(tmp_path):
    db = Database(str(tmp_path / "scores.db"))
    db.cur.execute("INSERT INTO BestScores (profile, best) VALUES (?, 9e999)", (db.profile,))
    db.conn.commit()
    assert db.load_best() == 0
    assert GameSession(store=db).best_score == 0
    db.close()


def test_file_that_is_not_a_database_reads_as_zero(tmp_path):
    path = tmp_path / "scores.db"
    path.write_bytes(b"this is not an sqlite file\n" * 64)

    db = Database(str(path))
    assert db.load_best() == 0
    assert GameSession(store=db).best_score == 0
    with pytest.raises(sqlite3.DatabaseError):
        db.save_best(3)
    db.close()
    assert path.read_bytes().startswith(b"this is not an sqlite file")


def test_save_judges_malformed_row_like_load(tmp_path):
    db = Database(str(tmp_path / "scores.db"))
    db.cur.execute("INSERT INTO BestScores (profile, best) VALUES (?, ?)", (db.profile, "12x"))
    db.conn.commit()
    db.save_best(5)
    assert db.load_best() == 5
    db.close()


def test_save_keeps_higher_numeric_text_row(tmp_path):
    db = Database(str(tmp_path / "scores.db"))
    db.cur.execute("INSERT INTO BestScores (profile, best) VALUES (?, ?)", (db.profile, "9"))
    db.conn.commit()
    db.save_best(3)
    assert db.load_best() == 9
    db.close()
