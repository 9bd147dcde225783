from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from toolshed.errors import BackendFailureError, ConflictError, LendingError
from toolshed.extensions import db


def run_in_transaction(work, tag: str):
    """Run ``work()`` and commit; replay it after version conflicts.

    ``work`` must do all of its reads inside the call so a replay starts from
    fresh rows. Any failure rolls back every write ``work`` made.
    """
    retries = current_app.config.get("LENDING_CONFLICT_RETRIES", 0)
    attempt = 0
    while True:
        try:
            result = work()
            db.session.commit()
            return result
        except LendingError:
            db.session.rollback()
            raise
        except (StaleDataError, IntegrityError) as e:
            db.session.rollback()
            if attempt >= retries:
                current_app.logger.warning(f"[{tag}] conflict after {attempt + 1} attempt(s): {e}")
                raise ConflictError() from e
            attempt += 1
            current_app.logger.info(f"[{tag}] conflict, retrying ({attempt}/{retries})")
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.exception(f"[{tag}] database error: {e}")
            raise BackendFailureError("Database operation failed") from e
