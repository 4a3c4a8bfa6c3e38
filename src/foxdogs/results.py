"""High-score table for finished matches.

Results are written once a match ends and read back ordered by fewest rounds,
longer games first among equal round counts.
"""
from __future__ import annotations

import logging
import os
from datetime import timedelta
from typing import List

from pydantic import BaseModel, Field
from sqlalchemy import Float, Integer, String, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from .engine import Role

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///foxdogs.db"


class GameResult(BaseModel):
    player: str = Field(min_length=1, max_length=100)
    rounds: int = Field(ge=0)
    duration: timedelta
    winner: Role


class Base(DeclarativeBase):
    pass


class GameResultRow(Base):
    __tablename__ = "game_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player: Mapped[str] = mapped_column(String(100), nullable=False)
    rounds: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    duration_seconds: Mapped[float] = mapped_column(Float, nullable=False)
    winner: Mapped[str] = mapped_column(String(8), nullable=False)

    def to_result(self) -> GameResult:
        return GameResult(
            player=self.player,
            rounds=self.rounds,
            duration=timedelta(seconds=self.duration_seconds),
            winner=Role(self.winner),
        )


def database_url() -> str:
    return os.getenv("FOXDOGS_DATABASE_URL", DEFAULT_DATABASE_URL)


def create_engine_from_env(url: str | None = None) -> Engine:
    return create_engine(url or database_url())


class GameResultDao:
    def __init__(self, engine: Engine) -> None:
        Base.metadata.create_all(bind=engine)
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)

    def persist(self, result: GameResult) -> None:
        row = GameResultRow(
            player=result.player,
            rounds=result.rounds,
            duration_seconds=result.duration.total_seconds(),
            winner=result.winner.value,
        )
        with self._sessions.begin() as session:
            session.add(row)
        logger.info("Stored result for %s: %d rounds, %s", result.player, result.rounds, result.duration)

    def find_best(self, n: int) -> List[GameResult]:
        """Return at most ``n`` results, fewest rounds first, ties by longer duration."""
        if n < 0:
            raise ValueError("n must not be negative")
        stmt = (
            select(GameResultRow)
            .order_by(GameResultRow.rounds.asc(), GameResultRow.duration_seconds.desc())
            .limit(n)
        )
        with self._sessions() as session:
            return [row.to_result() for row in session.scalars(stmt)]

    def find_all(self) -> List[GameResult]:
        with self._sessions() as session:
            rows = session.scalars(select(GameResultRow).order_by(GameResultRow.id))
            return [row.to_result() for row in rows]
