"""
Order number generation.

Format: ``PREFIX-YYYYMMDD-SEQ``

    admin            ADM-20240115-001        key admin:20240115
    customer-portal  CPO-20240115-001        key portal:20240115
    sales-rep        SRP-1234-20240115-001   key rep:user-00001234:20240115

SEQ is the per-key counter padded to 3 digits. Past 999 it simply grows
(ADM-20240115-1000); there is no cap and no rollover.

Only the UTC calendar date of the reference moment partitions the counters.
Uniqueness holds for everything issued through one generator (and so one
counter store). Several processes only share that guarantee when they share a
``SqlCounterStore``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable

from orderdesk.app.db.models.core_types import OrderChannel, OrderNumberErrorCode
from orderdesk.services.counter_store import CounterStore, InMemoryCounterStore

logger = logging.getLogger(__name__)

SEQUENCE_WIDTH = 3
ACTOR_SUFFIX_LENGTH = 4

_ORDER_NUMBER_RE = re.compile(r"^(?P<prefix>.+)-(?P<date>\d{8})-(?P<sequence>\d{3,})$")


# ---------- Errors ----------
class OrderNumberError(ValueError):
    code: OrderNumberErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidChannel(OrderNumberError):
    code = OrderNumberErrorCode.invalid_channel

    def __init__(self, channel: object) -> None:
        super().__init__(f"Unknown order channel: {channel!r}")
        self.channel = channel


class MissingActor(OrderNumberError):
    code = OrderNumberErrorCode.missing_actor

    def __init__(self) -> None:
        super().__init__("Sales rep orders require an actor id")


class GeneratorDisposed(RuntimeError):
    pass


# ---------- Values ----------
@dataclass(frozen=True)
class IssuedOrderNumber:
    order_number: str
    key: str
    prefix: str
    day: str
    sequence: int


@dataclass(frozen=True)
class ParsedOrderNumber:
    prefix: str
    date: date
    sequence: int


@dataclass(frozen=True)
class _Partition:
    key: str
    prefix: str
    day: str


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_day(reference: date | datetime) -> str:
    """YYYYMMDD of the UTC calendar date. Naive datetimes are taken as UTC."""
    if isinstance(reference, datetime):
        if reference.tzinfo is not None:
            reference = reference.astimezone(timezone.utc)
        return reference.strftime("%Y%m%d")
    return reference.strftime("%Y%m%d")


def parse_order_number(value: str) -> ParsedOrderNumber:
    m = _ORDER_NUMBER_RE.match(value or "")
    if not m:
        raise ValueError(f"Not an order number: {value!r}")
    try:
        day = datetime.strptime(m.group("date"), "%Y%m%d").date()
    except ValueError:
        raise ValueError(f"Not an order number: {value!r}") from None
    return ParsedOrderNumber(
        prefix=m.group("prefix"),
        date=day,
        sequence=int(m.group("sequence")),
    )


# ---------- Generator ----------
class OrderNumberGenerator:
    """
    Issues order numbers partitioned by channel, day and (for sales reps) actor.

    Owned by the application: build one per deployment, inject it where
    orders are created, ``reset()`` between tests and ``dispose()`` on
    shutdown.
    """

    def __init__(
        self,
        store: CounterStore | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store if store is not None else InMemoryCounterStore()
        self._clock = clock
        self._disposed = False

    @property
    def store(self) -> CounterStore:
        return self._store

    def _partition(
        self,
        channel: OrderChannel | str,
        actor_id: str | None,
        reference_date: date | datetime | None,
    ) -> _Partition:
        try:
            ch = OrderChannel(channel)
        except ValueError:
            raise InvalidChannel(channel) from None

        day = format_day(reference_date if reference_date is not None else self._clock())

        if ch is OrderChannel.admin:
            return _Partition(f"admin:{day}", "ADM", day)
        if ch is OrderChannel.customer_portal:
            return _Partition(f"portal:{day}", "CPO", day)

        if not actor_id:
            raise MissingActor()
        return _Partition(f"rep:{actor_id}:{day}", f"SRP-{actor_id[-ACTOR_SUFFIX_LENGTH:]}", day)

    def partition_key(
        self,
        channel: OrderChannel | str,
        actor_id: str | None = None,
        reference_date: date | datetime | None = None,
    ) -> str:
        """Key ``generate`` would advance for these arguments. Never mutates."""
        return self._partition(channel, actor_id, reference_date).key

    def generate(
        self,
        channel: OrderChannel | str,
        actor_id: str | None = None,
        reference_date: date | datetime | None = None,
    ) -> str:
        return self.issue(channel, actor_id, reference_date).order_number

    def issue(
        self,
        channel: OrderChannel | str,
        actor_id: str | None = None,
        reference_date: date | datetime | None = None,
    ) -> IssuedOrderNumber:
        """Like ``generate`` but also returns the key and sequence it used."""
        if self._disposed:
            raise GeneratorDisposed("Order number generator has been disposed")

        try:
            part = self._partition(channel, actor_id, reference_date)
        except OrderNumberError as e:
            logger.warning("Order number refused (%s): %s", e.code.value, e.message)
            raise

        # validation is complete before the only mutation
        sequence = self._store.increment(part.key)
        number = f"{part.prefix}-{part.day}-{sequence:0{SEQUENCE_WIDTH}d}"
        logger.debug("Issued %s (key=%s)", number, part.key)
        return IssuedOrderNumber(
            order_number=number,
            key=part.key,
            prefix=part.prefix,
            day=part.day,
            sequence=sequence,
        )

    def generate_admin(self, reference_date: date | datetime | None = None) -> str:
        return self.generate(OrderChannel.admin, reference_date=reference_date)

    def generate_sales_rep(
        self,
        actor_id: str,
        reference_date: date | datetime | None = None,
    ) -> str:
        return self.generate(OrderChannel.sales_rep, actor_id, reference_date)

    def generate_customer_portal(self, reference_date: date | datetime | None = None) -> str:
        return self.generate(OrderChannel.customer_portal, reference_date=reference_date)

    def get_counter(self, key: str) -> int:
        return self._store.get(key)

    def reset(self) -> None:
        """Clear every counter. Test isolation and explicit admin action only."""
        logger.warning("Resetting all order number counters")
        self._store.clear()

    def dispose(self) -> None:
        self._disposed = True
