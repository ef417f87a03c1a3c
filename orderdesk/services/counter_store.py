"""
Counter stores behind the order number generator.

A store owns the table ``partition key -> last issued sequence``. The only
mutation entry point is ``increment``, which reads, adds one and writes back
as a single step with respect to other ``increment`` calls on the same key.

- ``InMemoryCounterStore``: one process, a lock around the table.
- ``SqlCounterStore``: shared table ``order_sequences``, one
  UPDATE ... SET value = value + 1 RETURNING value per increment, insert on
  first use.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from orderdesk.app.db.models.models_v1 import OrderSequence

logger = logging.getLogger(__name__)


class CounterStore(Protocol):
    def increment(self, key: str) -> int: ...

    def get(self, key: str) -> int: ...

    def clear(self) -> None: ...


class InMemoryCounterStore:
    def __init__(self) -> None:
        self._counters: dict[str, int] = {}
        self._lock = threading.Lock()

    def increment(self, key: str) -> int:
        with self._lock:
            value = self._counters.get(key, 0) + 1
            self._counters[key] = value
            return value

    def get(self, key: str) -> int:
        with self._lock:
            return self._counters.get(key, 0)

    def clear(self) -> None:
        with self._lock:
            self._counters.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._counters)


class SqlCounterStore:
    """
    Durable counters in ``order_sequences``.

    Every call runs in its own transaction from ``session_factory`` so the
    row is released as soon as the new value is committed.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def increment(self, key: str) -> int:
        try:
            return self._increment_once(key)
        except IntegrityError:
            # Two callers created the row at the same time: the loser retries
            # against the row that now exists.
            logger.debug("Concurrent insert for counter %s, retrying", key)
            return self._increment_once(key)

    def _increment_once(self, key: str) -> int:
        # value + 1 is computed by the database, in a single statement
        with self._session_factory() as db:
            with db.begin():
                value = db.execute(
                    update(OrderSequence)
                    .where(OrderSequence.key == key)
                    .values(value=OrderSequence.value + 1)
                    .returning(OrderSequence.value)
                    .execution_options(synchronize_session=False)
                ).scalar_one_or_none()

                if value is None:
                    db.add(OrderSequence(key=key, value=1))
                    db.flush()
                    value = 1
            return int(value)

    def get(self, key: str) -> int:
        with self._session_factory() as db:
            value = db.execute(
                select(OrderSequence.value).where(OrderSequence.key == key)
            ).scalar_one_or_none()
            return int(value) if value is not None else 0

    def clear(self) -> None:
        with self._session_factory() as db:
            with db.begin():
                db.execute(delete(OrderSequence))
