# File: site_index/crawler/frontier.py
"""Crawl frontier: the pending-URL pool plus the visited/attempted record of one crawl.

Every public method takes the same re-entrant lock, so the operations are
linearizable with respect to each other even if fetch workers run on several
threads. :meth:`Frontier.admit` combines the eligibility check and the push in
one critical section, which is what keeps two workers from queueing the same
newly discovered link.

Two storages are provided:

* :class:`MemoryFrontier` – plain in-process collections, used by default;
* :class:`SqliteFrontier` – an SQLite file, so an interrupted crawl resumes
  from the stored pool on the next run.
"""

from __future__ import annotations

import sqlite3
import threading
from abc import ABC, abstractmethod
from collections import deque
from pathlib import Path
from typing import Callable, Deque, Dict, List, Optional, Set, Union

from site_index.crawler.models import VisitedRecord
from site_index.errors import DuplicateVisit, EmptyFrontier, FrontierError

__all__ = ["Frontier", "MemoryFrontier", "SqliteFrontier"]


class Frontier(ABC):
    """Locked facade over a storage backend. Subclasses implement the ``_`` methods."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    # -- public, linearizable API ------------------------------------------- #

    def pool_size(self) -> int:
        with self._lock:
            return self._pool_size()

    def push_pool(self, url: str) -> None:
        """Append ``url`` to the tail of the pool. Eligibility is the caller's job."""
        with self._lock:
            self._push_pool(url)

    def pop_pool(self) -> str:
        """Remove and return the head of the pool; :class:`EmptyFrontier` if empty."""
        with self._lock:
            if self._pool_size() == 0:
                raise EmptyFrontier("pending pool is empty")
            return self._pop_pool()

    def mark_visited(self, url: str, content: str) -> VisitedRecord:
        with self._lock:
            if self._is_visited(url):
                raise DuplicateVisit(url)
            record = VisitedRecord(url=url, content=content, index=self._visited_count() + 1)
            self._add_visited(record)
            return record

    def visited_count(self) -> int:
        with self._lock:
            return self._visited_count()

    def has_been_attempted(self, url: str) -> bool:
        """True once ``url`` was pushed to the pool or visited."""
        with self._lock:
            return self._is_attempted(url)

    def all_visited(self) -> List[VisitedRecord]:
        with self._lock:
            return self._all_visited()

    def admit(self, url: str, predicate: Callable[[str], bool]) -> bool:
        """Push ``url`` if ``predicate(url)`` holds, atomically. Returns whether it was pushed."""
        with self._lock:
            if not predicate(url):
                return False
            self._push_pool(url)
            return True

    def close(self) -> None:
        """Release storage resources. The in-memory frontier has none."""

    def __enter__(self) -> Frontier:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- storage hooks -------------------------------------------------------- #

    @abstractmethod
    def _pool_size(self) -> int: ...

    @abstractmethod
    def _push_pool(self, url: str) -> None: ...

    @abstractmethod
    def _pop_pool(self) -> str: ...

    @abstractmethod
    def _is_visited(self, url: str) -> bool: ...

    @abstractmethod
    def _add_visited(self, record: VisitedRecord) -> None: ...

    @abstractmethod
    def _visited_count(self) -> int: ...

    @abstractmethod
    def _is_attempted(self, url: str) -> bool: ...

    @abstractmethod
    def _all_visited(self) -> List[VisitedRecord]: ...


class MemoryFrontier(Frontier):
    """Frontier kept in process memory; lost when the crawl ends."""

    def __init__(self) -> None:
        super().__init__()
        self._pool: Deque[str] = deque()
        self._attempted: Set[str] = set()
        # dicts keep insertion order, i.e. crawl order
        self._visited: Dict[str, VisitedRecord] = {}

    def _pool_size(self) -> int:
        return len(self._pool)

    def _push_pool(self, url: str) -> None:
        self._pool.append(url)
        self._attempted.add(url)

    def _pop_pool(self) -> str:
        return self._pool.popleft()

    def _is_visited(self, url: str) -> bool:
        return url in self._visited

    def _add_visited(self, record: VisitedRecord) -> None:
        self._visited[record.url] = record
        self._attempted.add(record.url)

    def _visited_count(self) -> int:
        return len(self._visited)

    def _is_attempted(self, url: str) -> bool:
        return url in self._attempted or url in self._visited

    def _all_visited(self) -> List[VisitedRecord]:
        return list(self._visited.values())


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS pool (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    url TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS attempted (
    url TEXT PRIMARY KEY
) WITHOUT ROWID;

CREATE TABLE IF NOT EXISTS visited (
    idx INTEGER PRIMARY KEY,
    url TEXT NOT NULL UNIQUE,
    content TEXT NOT NULL
);
"""


class SqliteFrontier(Frontier):
    """Frontier persisted in an SQLite database file.

    The pool, the attempted set and the visited records survive a restart, so a
    crawl that was interrupted continues where it stopped. Any database error
    is re-raised as :class:`FrontierError` and ends the crawl.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__()
        self.path = Path(path)
        self._con: Optional[sqlite3.Connection] = None
        try:
            if str(path) != ":memory:":
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self._con = sqlite3.connect(str(path), check_same_thread=False, isolation_level=None)
            self._con.execute("PRAGMA journal_mode=WAL")
            self._con.executescript(SCHEMA_SQL)
        except (OSError, sqlite3.Error) as exc:
            raise FrontierError(f"cannot open frontier database {path}: {exc}") from exc

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        if self._con is None:
            raise FrontierError("frontier database is closed")
        try:
            return self._con.execute(sql, params)
        except sqlite3.Error as exc:
            raise FrontierError(f"frontier database error: {exc}") from exc

    def _scalar(self, sql: str, params: tuple = ()) -> int:
        row = self._execute(sql, params).fetchone()
        return int(row[0]) if row else 0

    def _pool_size(self) -> int:
        return self._scalar("SELECT COUNT(*) FROM pool")

    def _push_pool(self, url: str) -> None:
        self._execute("BEGIN")
        try:
            self._execute("INSERT INTO pool(url) VALUES(?)", (url,))
            self._execute("INSERT OR IGNORE INTO attempted(url) VALUES(?)", (url,))
        except FrontierError:
            self._execute("ROLLBACK")
            raise
        self._execute("COMMIT")

    def _pop_pool(self) -> str:
        seq, url = self._execute("SELECT seq, url FROM pool ORDER BY seq LIMIT 1").fetchone()
        self._execute("DELETE FROM pool WHERE seq = ?", (seq,))
        return url

    def _is_visited(self, url: str) -> bool:
        return self._scalar("SELECT COUNT(*) FROM visited WHERE url = ?", (url,)) > 0

    def _add_visited(self, record: VisitedRecord) -> None:
        self._execute("BEGIN")
        try:
            self._execute(
                "INSERT INTO visited(idx, url, content) VALUES(?,?,?)",
                (record.index, record.url, record.content),
            )
            self._execute("INSERT OR IGNORE INTO attempted(url) VALUES(?)", (record.url,))
        except FrontierError:
            self._execute("ROLLBACK")
            raise
        self._execute("COMMIT")

    def _visited_count(self) -> int:
        return self._scalar("SELECT COUNT(*) FROM visited")

    def _is_attempted(self, url: str) -> bool:
        return self._scalar("SELECT COUNT(*) FROM attempted WHERE url = ?", (url,)) > 0

    def _all_visited(self) -> List[VisitedRecord]:
        rows = self._execute("SELECT url, content, idx FROM visited ORDER BY idx").fetchall()
        return [VisitedRecord(url=url, content=content, index=idx) for url, content, idx in rows]

    def close(self) -> None:
        with self._lock:
            if self._con is not None:
                self._con.close()
                self._con = None
