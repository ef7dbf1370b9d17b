import contextlib
import logging

from database import database
from database.repository import MatchingRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def matching_uow():
    """Per-unit-of-work transaction scope.

    Yields a MatchingRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes. Batched lookups draw their own
    sessions from the same SessionLocal.

    Usage:
        with matching_uow() as repo:
            service = context.build_matching_service(repo)
            service.auto_assign(booking_id)
        # assignment is committed on successful exit
    """
    session = database.SessionLocal()
    repo = MatchingRepository(session, session_factory=database.SessionLocal)
    try:
        yield repo
        repo.commit()
    except Exception:
        repo.rollback()
        logger.debug("Matching unit of work rolled back")
        raise
    finally:
        session.close()
