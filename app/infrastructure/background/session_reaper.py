"""
Background sweep that deactivates expired sessions and purges stale auth data
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.orm import Session as DbSession

from ...core.config import settings
from ...db.database import SessionLocal
from ...domain.exceptions import StoreUnavailableError
from ..repositories.unit_of_work_impl import UnitOfWorkImpl

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    expired_sessions: int = 0
    purged_sessions: int = 0
    purged_codes: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.expired_sessions or self.purged_sessions or self.purged_codes)


class SessionReaper:
    """Periodically revokes sessions past their expiry.

    Request handlers already revoke an expired session when it is presented;
    the reaper catches the ones nobody presents again. A failed sweep is
    logged and retried on the next tick, except when the session table is
    missing altogether, which stops the loop.
    """

    def __init__(
        self,
        session_factory: Callable[[], DbSession] = None,
        interval_seconds: Optional[float] = None,
    ):
        self.session_factory = session_factory or SessionLocal
        self.interval_seconds = interval_seconds or settings.SESSION_REAPER_INTERVAL_SECONDS
        self.is_running = False
        self._task: Optional[asyncio.Task] = None

    async def start(self):
        if self.is_running:
            return

        self.is_running = True
        self._task = asyncio.create_task(self._run())
        logger.info(f"Session reaper started, sweeping every {self.interval_seconds}s")

    async def stop(self):
        self.is_running = False
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Session reaper stopped")

    async def sweep_once(self, now: Optional[datetime] = None) -> SweepResult:
        """Run one sweep. Safe to repeat: a second run finds nothing to do."""
        now = now or datetime.utcnow()

        # Repositories block on the database, keep them off the event loop
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, self._sweep_in_thread, now)

        if result.changed:
            logger.info(
                f"Session sweep: {result.expired_sessions} expired, "
                f"{result.purged_sessions} old sessions and {result.purged_codes} old codes purged"
            )
        return result

    def _sweep_in_thread(self, now: datetime) -> SweepResult:
        return asyncio.run(self._sweep(now))

    async def _sweep(self, now: datetime) -> SweepResult:
        db = self.session_factory()
        try:
            unit_of_work = UnitOfWorkImpl(db)
            if not unit_of_work.sessions.is_available():
                raise StoreUnavailableError("Sessions table does not exist")

            async with unit_of_work:
                result = SweepResult(
                    expired_sessions=await unit_of_work.sessions.revoke_expired(now),
                    purged_sessions=await unit_of_work.sessions.delete_inactive(
                        now - timedelta(days=settings.INACTIVE_SESSION_RETENTION_DAYS)
                    ),
                    purged_codes=await unit_of_work.one_time_codes.delete_expired(
                        now - timedelta(hours=settings.OTP_RETENTION_HOURS)
                    ),
                )
        finally:
            db.close()
        return result

    async def _run(self):
        while self.is_running:
            try:
                await self.sweep_once()
            except asyncio.CancelledError:
                raise
            except StoreUnavailableError as e:
                logger.error(f"Stopping session reaper: {e}")
                self.is_running = False
                break
            except Exception:
                logger.exception("Session sweep failed, retrying on next tick")

            await asyncio.sleep(self.interval_seconds)


def run_sweep() -> SweepResult:
    """Synchronous entry point for schedulers outside the web process"""
    return asyncio.run(SessionReaper().sweep_once())
