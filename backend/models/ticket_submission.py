from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class TicketSubmission(Base):
    """Live marker state of one ticket, recorded by the entry flow."""

    __tablename__ = "ticket_submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    competition_id: Mapped[str] = mapped_column(
        ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False
    )
    participant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    ticket_id: Mapped[str] = mapped_column(String(64), nullable=False)
    ticket_number: Mapped[int] = mapped_column(Integer, nullable=False)
    markers_json: Mapped[str] = mapped_column(
        Text, nullable=False
    )  # [{"id": "...", "x": 0.1, "y": 0.2}]
    submitted_at_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("competition_id", "ticket_id", name="uq_ticket_submission_ticket"),
        Index("ix_ticket_submission_participant", "competition_id", "participant_id"),
    )
