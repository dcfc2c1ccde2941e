import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.shared.errors import Conflict, ServerError

logger = logging.getLogger(__name__)


def commit_or_rollback(db: Session, failure_message: str) -> None:
    """
    Commit the pending unit of work or roll all of it back.

    Raises:
        Conflict: a unique or foreign key constraint rejected the changes
        ServerError: any other database failure
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Integrity error: {failure_message}: {e}")
        raise Conflict(failure_message)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error: {failure_message}: {e}")
        raise ServerError(failure_message)
