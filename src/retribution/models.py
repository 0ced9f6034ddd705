"""Database models for Retribution."""

import datetime as dt

from sqlmodel import Field, SQLModel


class MapRecord(SQLModel, table=True):
    __tablename__ = "maps"

    name: str = Field(primary_key=True)
    grid: str  # JSON from engine.world.grid_to_data
    updated_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )
