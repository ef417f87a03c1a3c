from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from orderdesk.app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------- ORDER NUMBERS ----------
class OrderSequence(Base):
    """Last sequence issued for one partition key (e.g. ``rep:user-42:20240115``)."""

    __tablename__ = "order_sequences"
    key: Mapped[str] = mapped_column(String(160), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("value >= 0", name="ck_order_sequence_value_nonneg"),
    )
