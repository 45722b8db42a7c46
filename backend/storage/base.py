# backend/storage/base.py
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import exc as sa_exc
from sqlalchemy.orm import Session, sessionmaker

from storage.errors import ConstraintViolation, ConnectivityFailure

logger = logging.getLogger(__name__)


class BaseQueries:
    """
    Shared plumbing for the storage mixins.

    Each operation opens its own session, so a pooled connection is held only
    for the statements of that one operation and returned right after.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """
        Session scope for one storage operation.

        Commits on success, rolls back on any error and translates driver
        errors into ConstraintViolation / ConnectivityFailure.
        """
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except sa_exc.IntegrityError as e:
            db.rollback()
            logger.warning("Constraint violation: %s", e.orig)
            raise ConstraintViolation(str(e.orig)) from e
        except (sa_exc.OperationalError, sa_exc.InterfaceError, sa_exc.TimeoutError) as e:
            db.rollback()
            logger.error("Database unavailable: %s", e)
            raise ConnectivityFailure(str(e)) from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    @staticmethod
    def _dialect(db: Session) -> str:
        return db.get_bind().dialect.name
