"""Checkout summary: snapshot of a participant's tickets and markers taken at checkout."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class CheckoutSummary(Base):
    """
    One document per (competition, participant).

    summary_json holds the raw document:
    {participantId, userId?, participant: {id, name, phone}, tickets: [{ticketNumber, markers: [{id, x, y, label}]}]}
    """

    __tablename__ = "checkout_summaries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    competition_id: Mapped[str] = mapped_column(
        ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    participant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    summary_json: Mapped[str] = mapped_column(
        Text, nullable=False
    )  # TODO: Use JSON type when supported.
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at_utc: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "competition_id", "participant_id", name="uq_checkout_summary_competition_participant"
        ),
    )
