import contextlib
import logging

from sqlalchemy.orm import sessionmaker

from database.repository import AtsRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def ats_uow(session_factory: sessionmaker):
    """Per-unit-of-work transaction scope.

    Yields an AtsRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with ats_uow(session_factory) as repo:
            assessment = repo.assessments.get_by_id(tenant_id, assessment_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = session_factory()
    try:
        repo = AtsRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
