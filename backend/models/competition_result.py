"""Competition result: the winners of the latest computation run, one row per competition."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class CompetitionResultRecord(Base):
    """
    Winners for one competition. Every column is rewritten on recompute.

    winners_json keeps full-precision distances; rounding happens when the
    result is serialized for callers.
    """

    __tablename__ = "competition_results"

    competition_id: Mapped[str] = mapped_column(
        ForeignKey("competitions.id", ondelete="CASCADE"), primary_key=True
    )
    final_judge_x: Mapped[float] = mapped_column(Float, nullable=False)
    final_judge_y: Mapped[float] = mapped_column(Float, nullable=False)
    winners_json: Mapped[str] = mapped_column(
        Text, nullable=False
    )  # [{"ticketId": ..., "distance": ..., "marker": {...}}]
    computed_at_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
