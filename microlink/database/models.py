"""Data models for short links."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping


@dataclass
class Link:
    """A short code registered against a target URL."""

    id: int
    short_code: str
    target_url: str
    clicks: int
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "short_code": self.short_code,
            "target_url": self.target_url,
            "clicks": self.clicks,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Link":
        """Create from a database row or dictionary."""
        return cls(
            id=record["id"],
            short_code=record["short_code"],
            target_url=record["target_url"],
            clicks=record["clicks"],
            created_at=record["created_at"],
            updated_at=record["updated_at"],
        )
