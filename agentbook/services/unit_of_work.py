import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from agentbook.errors import ConflictError, PersistenceError
from agentbook.extensions import db

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work():
    """Run a block as one transaction on the request session.

    Commits when the block succeeds and rolls back on any exception. Store
    failures are re-raised as app errors so callers never see a half
    applied change.
    """
    try:
        yield db.session
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        logger.warning("Integrity error, transaction rolled back: %s", getattr(exc, "orig", exc))
        raise ConflictError("Conflict. Resource already exists.") from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Database failure, transaction rolled back")
        raise PersistenceError("Storage failure. Please retry later.") from exc
    except Exception:
        db.session.rollback()
        raise
