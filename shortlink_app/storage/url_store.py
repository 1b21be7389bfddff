"""
Persistent store for short URL records.

The store is the single source of truth. Each write commits before it
returns, so an acknowledged write survives a restart. Connectivity
problems surface as StoreUnavailableError; there is no fallback for the
authority.
"""

import functools
import logging
from datetime import datetime
from typing import Any, Callable, List, Optional, TypeVar

from sqlalchemy import insert, update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from shortlink_app.exceptions import DuplicateCodeError, StoreUnavailableError
from shortlink_app.models.url import URL

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_database_error(method: F) -> F:
    """Translate driver connectivity errors into StoreUnavailableError.

    The session is rolled back so it stays usable for the rest of the request.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except OperationalError as e:
            self.db.rollback()
            logger.error("Store operation %s failed: %s", method.__name__, e)
            raise StoreUnavailableError(f"Persistent store unavailable during {method.__name__}") from e

    return wrapper


class URLStore:
    """
    SQLAlchemy-backed store for URL records.

    Every operation is atomic at the single-record level:
    - lookups are plain SELECTs
    - the visit counter is a single `UPDATE ... SET visits = visits + 1`
    - the code primary key rejects duplicate inserts
    """

    def __init__(self, db: Session):
        """
        Args:
            db: Database session (one per request)
        """
        self.db = db

    @handle_database_error
    def find_by_url(self, original_url: str) -> Optional[URL]:
        """Oldest record for an exact normalized URL, if any"""
        return (
            self.db.query(URL)
            .filter(URL.original_url == original_url)
            .order_by(URL.created_at)
            .first()
        )

    @handle_database_error
    def find_by_code(self, code: str) -> Optional[URL]:
        return self.db.get(URL, code)

    @handle_database_error
    def insert(self, code: str, original_url: str, created_at: datetime) -> URL:
        """
        Insert a new record with zero visits.

        Raises:
            DuplicateCodeError: If `code` is already taken. Any other
                integrity failure is re-raised untouched.
        """
        # Core INSERT so the primary key, not the identity map, decides
        statement = insert(URL).values(
            code=code,
            original_url=original_url,
            created_at=created_at,
            visits=0,
        )
        try:
            self.db.execute(statement)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            if self.db.get(URL, code) is not None:
                raise DuplicateCodeError(code)
            raise
        return self.db.get(URL, code)

    @handle_database_error
    def list_all(self) -> List[URL]:
        return self.db.query(URL).order_by(URL.created_at).all()

    @handle_database_error
    def delete_by_code(self, code: str) -> int:
        """Delete a record; returns the number of rows removed (0 or 1)"""
        deleted = (
            self.db.query(URL)
            .filter(URL.code == code)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted

    @handle_database_error
    def increment_visits(self, code: str) -> None:
        """Atomically bump the visit counter; a missing code is a no-op"""
        self.db.execute(
            update(URL)
            .where(URL.code == code)
            .values(visits=URL.visits + 1)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
