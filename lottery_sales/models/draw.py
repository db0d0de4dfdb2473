"""Draw ORM model."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from lottery_sales.models.base import Base


class Draw(Base):
    """A scheduled lottery event owning a set of tickets."""

    __tablename__ = "draws"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    draw_date: Mapped[date] = mapped_column(Date, nullable=False)
