from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KeyValueEntry(SQLModel, table=True):
    """One JSON-encoded value per storage key (backs the ``sql`` store)."""

    __tablename__ = "kv_entry"

    key: str = Field(primary_key=True, max_length=512)
    value: str
    updated_at: datetime = Field(default_factory=_utcnow)
