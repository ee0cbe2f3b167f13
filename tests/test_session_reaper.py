import asyncio
import time
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from app.db.database import SessionLocal, engine
from app.domain.enums import OtpPurpose
from app.domain.exceptions import StoreUnavailableError
from app.infrastructure.background.session_reaper import SessionReaper, SweepResult
from app.infrastructure.orm import OneTimeCodeModel, SessionModel

from conftest import run

NOW = datetime(2024, 3, 15, 12, 0)


@pytest.fixture
def add_session(db, make_user):
    user = make_user()

    def _add_session(expires_at, is_active=True, updated_at=None):
        model = SessionModel(
            id=uuid4(),
            user_id=user.id,
            token=f"token-{uuid4()}",
            device_info={},
            is_active=is_active,
            last_activity_at=NOW - timedelta(hours=2),
            expires_at=expires_at,
            created_at=NOW - timedelta(hours=2),
            updated_at=updated_at or NOW - timedelta(hours=2),
        )
        db.add(model)
        db.commit()
        return model.id

    return _add_session


def active_flags(db):
    db.expire_all()
    return {model.id: model.is_active for model in db.query(SessionModel).all()}


def test_sweep_revokes_only_expired_sessions(db, add_session):
    expired = add_session(NOW - timedelta(minutes=1))
    live = add_session(NOW + timedelta(minutes=30))

    result = run(SessionReaper().sweep_once(now=NOW))

    assert result.expired_sessions == 1
    assert active_flags(db) == {expired: False, live: True}


def test_sweep_is_idempotent(db, add_session):
    add_session(NOW - timedelta(minutes=1))
    reaper = SessionReaper()

    first = run(reaper.sweep_once(now=NOW))
    flags = active_flags(db)
    second = run(reaper.sweep_once(now=NOW))

    assert first.expired_sessions == 1
    assert second.expired_sessions == 0
    assert active_flags(db) == flags


def test_sweep_purges_stale_rows(db, add_session):
    old = add_session(NOW - timedelta(days=40), is_active=False, updated_at=NOW - timedelta(days=31))
    recent = add_session(NOW - timedelta(days=2), is_active=False, updated_at=NOW - timedelta(days=2))
    for expires_at in (NOW - timedelta(hours=25), NOW - timedelta(hours=1)):
        db.add(OneTimeCodeModel(
            id=uuid4(), email="rep@example.com", purpose=OtpPurpose.EMAIL_VERIFICATION,
            code="123456", expires_at=expires_at, created_at=expires_at - timedelta(minutes=10),
        ))
    db.commit()

    result = run(SessionReaper().sweep_once(now=NOW))

    assert result.purged_sessions == 1
    assert result.purged_codes == 1
    assert set(active_flags(db)) == {recent}
    assert old not in active_flags(db)
    assert db.query(OneTimeCodeModel).count() == 1


def test_missing_table_is_reported(db, schema):
    SessionModel.__table__.drop(bind=engine)

    with pytest.raises(StoreUnavailableError):
        run(SessionReaper().sweep_once(now=NOW))


def test_sweep_runs_off_the_event_loop(db):
    def slow_session():
        time.sleep(0.2)
        return SessionLocal()

    reaper = SessionReaper(session_factory=slow_session)

    async def scenario():
        ticks = 0
        sweep = asyncio.create_task(reaper.sweep_once(now=NOW))
        while not sweep.done():
            ticks += 1
            await asyncio.sleep(0.01)
        await sweep
        return ticks

    assert run(scenario()) > 5


def test_loop_keeps_going_after_a_failed_sweep():
    reaper = SessionReaper(interval_seconds=0.01)
    calls = []

    async def flaky_sweep(now=None):
        calls.append(now)
        if len(calls) == 1:
            raise RuntimeError("database hiccup")
        return SweepResult()

    reaper.sweep_once = flaky_sweep

    async def scenario():
        await reaper.start()
        await asyncio.sleep(0.1)
        still_running = reaper.is_running
        await reaper.stop()
        return still_running

    assert run(scenario()) is True
    assert len(calls) >= 2
    assert reaper.is_running is False


def test_loop_stops_when_the_store_is_unavailable():
    reaper = SessionReaper(interval_seconds=0.01)
    calls = []

    async def broken_sweep(now=None):
        calls.append(now)
        raise StoreUnavailableError("Sessions table does not exist")

    reaper.sweep_once = broken_sweep

    async def scenario():
        await reaper.start()
        await asyncio.sleep(0.1)
        stopped = not reaper.is_running
        await reaper.stop()
        return stopped

    assert run(scenario()) is True
    assert len(calls) == 1
