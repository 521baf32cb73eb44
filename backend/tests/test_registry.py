import random

import pytest

from guesstheword.services.games import RegistryFull, SessionNotFound, SessionRegistry, SessionState
from guesstheword.services.games.registry import generate_session_code, normalize_code


def test_create_get_and_dispose():
    reg = SessionRegistry()
    session = reg.create(rng=random.Random(5))
    code = session.session_code
    assert len(code) == 4 and code == code.upper()
    assert code in reg
    assert code.lower() in reg
    assert reg.get(code.lower()) is session
    assert len(reg) == 1

    reg.dispose(code)
    assert code not in reg
    assert session.state is SessionState.DISPOSED
    with pytest.raises(SessionNotFound):
        reg.get(code)
    with pytest.raises(SessionNotFound):
        reg.dispose(code)


def test_capacity_is_enforced():
    reg = SessionRegistry(max_sessions=2)
    reg.create()
    reg.create()
    with pytest.raises(RegistryFull):
        reg.create()
    reg.dispose_all()
    assert len(reg) == 0
    reg.create()
    reg.dispose_all()


def test_dispose_all_disposes_every_session():
    reg = SessionRegistry()
    sessions = [reg.create() for _ in range(3)]
    reg.dispose_all()
    assert all(s.state is SessionState.DISPOSED for s in sessions)
    assert len(reg) == 0


def test_generate_session_code_skips_existing():
    rng = random.Random(0)
    first = generate_session_code(set(), rng=random.Random(0))
    code = generate_session_code({first}, rng=rng)
    assert code != first
    assert len(code) == 4


def test_full_registry_evicts_finished_sessions():
    reg = SessionRegistry(max_sessions=2)
    done = reg.create()
    live = reg.create()
    done.timer.advance(60000)

    fresh = reg.create()
    assert done.session_code not in reg
    assert done.state is SessionState.DISPOSED
    assert live.session_code in reg and fresh.session_code in reg
    assert live.state is SessionState.RUNNING
    reg.dispose_all()


def test_running_sessions_are_never_evicted():
    reg = SessionRegistry(max_sessions=1)
    live = reg.create()
    with pytest.raises(RegistryFull):
        reg.create()
    assert live.state is SessionState.RUNNING
    reg.dispose_all()


def test_schedule_dispose_after_hold():
    reg = SessionRegistry()
    session = reg.create()
    spawned, slept, ended = [], [], []
    reg.schedule_dispose(session, 30, spawned.append, slept.append, on_disposed=ended.append)
    assert session.session_code in reg

    spawned[0]()
    assert slept == [30]
    assert session.session_code not in reg
    assert session.state is SessionState.DISPOSED
    assert ended == [session.session_code]


def test_schedule_dispose_skips_removed_session():
    reg = SessionRegistry()
    session = reg.create()
    spawned, ended = [], []
    reg.schedule_dispose(session, 30, spawned.append, lambda seconds: None, on_disposed=ended.append)
    reg.dispose(session.session_code)

    spawned[0]()
    assert ended == []


def test_normalize_code():
    assert normalize_code(' ab1c ') == 'AB1C'
    assert normalize_code(None) == ''
