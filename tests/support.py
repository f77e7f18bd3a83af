"""Models shared by the test suite."""

from dataclasses import dataclass, field

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


@dataclass
class User:
    email: str | None = None
    name: str | None = None
    password: str | None = None
    reference: str | None = None
    id: int | None = None
    tags: list[str] = field(default_factory=list)


@dataclass
class UserProfile:
    email: str | None = None
    bio: str | None = None
    id: int | None = None


class Base(DeclarativeBase):
    pass


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str | None] = mapped_column(String(120))
    name: Mapped[str | None] = mapped_column(String(120))
    reference: Mapped[str | None] = mapped_column(String(64))
