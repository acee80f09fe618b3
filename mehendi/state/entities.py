from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional


def _now():
    return datetime.now(timezone.utc)


def parse_datetime(value):
    if isinstance(value, datetime):
        return value
    if not value:
        return _now()
    # Older Pythons reject the trailing "Z" Postgres sometimes sends
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass
class Category:
    id: str
    name: str
    image: Optional[str] = None
    created_at: datetime = field(default_factory=_now)

    @classmethod
    def from_row(cls, row):
        return cls(
            id=str(row["id"]),
            name=row["name"],
            image=row.get("image"),
            created_at=parse_datetime(row.get("created_at")),
        )

    @classmethod
    def from_dict(cls, data):
        return cls(**dict(data, created_at=parse_datetime(data.get("created_at"))))

    def to_dict(self):
        return dict(asdict(self), created_at=self.created_at.isoformat())


@dataclass
class Product:
    """A design in a category gallery."""

    id: str
    name: str
    category_id: str
    image: Optional[str] = None
    created_at: datetime = field(default_factory=_now)

    @classmethod
    def from_row(cls, row):
        return cls(
            id=str(row["id"]),
            name=row.get("name") or f"Design {row['id']}",
            category_id=str(row["category_id"]),
            image=row.get("image_url"),
            created_at=parse_datetime(row.get("created_at")),
        )

    @classmethod
    def from_dict(cls, data):
        return cls(**dict(data, created_at=parse_datetime(data.get("created_at"))))

    def to_dict(self):
        return dict(asdict(self), created_at=self.created_at.isoformat())


@dataclass
class ContactSubmission:
    id: str
    name: str
    email: str
    phone: str
    message: str
    created_at: datetime = field(default_factory=_now)

    @classmethod
    def from_dict(cls, data):
        return cls(**dict(data, created_at=parse_datetime(data.get("created_at"))))

    def to_dict(self):
        return dict(asdict(self), created_at=self.created_at.isoformat())
