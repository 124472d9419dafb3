"""Service for cleanup operations."""
import logging
import threading
import time

from crackit.config import SESSION_CLEANUP_INTERVAL_SECONDS
from crackit.database import SessionLocal
from crackit.services.auth_service import cleanup_expired_sessions

logger = logging.getLogger(__name__)


def cleanup_sessions() -> int:
    """Remove expired login sessions from database."""
    try:
        db = SessionLocal()
        try:
            deleted = cleanup_expired_sessions(db)
            if deleted > 0:
                logger.info("Cleaned up %d expired sessions", deleted)
            return deleted
        finally:
            db.close()
    except Exception as e:
        logger.error("Failed to cleanup expired sessions: %s", e)
        return 0


def schedule_sessions_cleanup() -> None:
    """Schedule periodic cleanup of expired sessions."""

    def _worker() -> None:
        # Initial delay before first cleanup
        time.sleep(60)
        while True:
            cleanup_sessions()
            time.sleep(SESSION_CLEANUP_INTERVAL_SECONDS)

    thread = threading.Thread(
        target=_worker,
        name="sessions_cleanup",
        daemon=True,
    )
    thread.start()
