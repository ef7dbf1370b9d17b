import contextlib
from typing import Callable, Iterator, List, Optional, Sequence, TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")

# Upper bound on bound parameters per IN (...) clause
IN_CLAUSE_CHUNK_SIZE = 1000


class BaseRepository:
    def __init__(self, db: Session, session_factory: Optional[Callable[[], Session]] = None):
        self.db = db
        self.session_factory = session_factory

    @contextlib.contextmanager
    def _lookup_session(self) -> Iterator[Session]:
        """Session for a read-only batched lookup.

        With a session_factory every lookup gets its own short-lived Session,
        so a lookup abandoned after a timeout never shares self.db with later
        lookups or with the unit of work's writes.
        """
        if self.session_factory is None:
            yield self.db
            return

        session = self.session_factory()
        try:
            yield session
        finally:
            session.close()

    @staticmethod
    def _chunked(values: Sequence[T], size: int = IN_CLAUSE_CHUNK_SIZE) -> Iterator[List[T]]:
        """Split an IN (...) list so typical candidate sets still need a single query."""
        values = list(values)
        for start in range(0, len(values), size):
            yield values[start:start + size]
