import logging
from .celery_app import celery_app
from .domain.exceptions import StoreUnavailableError
from .infrastructure.background.session_reaper import run_sweep

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def sweep_sessions_task(self):
    """Deactivate expired sessions and purge stale auth rows."""
    try:
        result = run_sweep()
    except StoreUnavailableError as e:
        # Retrying cannot fix a missing table
        logger.error(f"Session sweep skipped: {e}")
        return None
    except Exception as exc:
        logger.error(f"Session sweep failed: {exc}")
        raise self.retry(exc=exc, countdown=60)

    return {
        "expired_sessions": result.expired_sessions,
        "purged_sessions": result.purged_sessions,
        "purged_codes": result.purged_codes,
    }
