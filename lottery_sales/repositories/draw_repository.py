"""Repository layer for Draw persistence."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from lottery_sales.models.draw import Draw


@dataclass(frozen=True)
class DrawRecord:
    id: int
    name: str
    draw_date: date


def _to_record(draw: Draw) -> DrawRecord:
    return DrawRecord(id=int(draw.id), name=str(draw.name), draw_date=draw.draw_date)


class DrawRepository:
    """CRUD operations for Draw."""

    def list_all(self, session: Session) -> Sequence[DrawRecord]:
        stmt = select(Draw).order_by(Draw.draw_date.asc(), Draw.id.asc())
        return [_to_record(d) for d in session.scalars(stmt).all()]

    def get_by_id(self, session: Session, draw_id: int) -> DrawRecord | None:
        draw = session.get(Draw, draw_id)
        return _to_record(draw) if draw is not None else None

    def create(self, session: Session, name: str, draw_date: date) -> DrawRecord:
        draw = Draw(name=name, draw_date=draw_date)
        session.add(draw)
        session.flush()  # assign PK
        return _to_record(draw)

    def delete(self, session: Session, draw_id: int) -> int:
        result = session.execute(delete(Draw).where(Draw.id == draw_id))
        return int(result.rowcount or 0)
