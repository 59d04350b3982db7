import time

from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class Entity(BaseModel):
    """Base entity class with a store-assigned integer identifier."""

    id: int | None = PydanticField(
        default=None,
        description="Unique identifier, assigned by the store on insert",
    )

    created_at: int = PydanticField(
        default_factory=now_ms,
        description="Creation time in milliseconds since the epoch",
    )


class EntityTable(SQLModel, table=False):
    """Base table with an autoincrement integer primary key."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Unique identifier for the row",
    )

    created_at: int = Field(default_factory=now_ms, nullable=False)
