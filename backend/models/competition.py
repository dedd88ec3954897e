from __future__ import annotations

from typing import Optional

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Competition(Base):
    """A mark-the-spot competition; final_judge_x/y stay null until an admin sets them."""

    __tablename__ = "competitions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="ACTIVE"
    )  # ACTIVE | CLOSED
    markers_per_ticket: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    final_judge_x: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    final_judge_y: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
