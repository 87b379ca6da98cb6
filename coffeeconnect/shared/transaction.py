"""Unit-of-work helper shared by the domain services"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(db: Session):
    """
    Commit everything done inside the block, or nothing.

    Domain errors are re-raised untouched after the rollback; store failures
    are re-raised as StoreError.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Store operation failed, rolled back: {e}")
        raise StoreError("The data store is unavailable. Please try again.") from e
    except Exception:
        db.rollback()
        raise
