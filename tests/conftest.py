"""Shared fixtures for findforge tests."""

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import findforge
from findforge.models import InMemoryModel
from support import Base, User


@pytest.fixture(autouse=True)
def reset_default_registry():
    """Start and end every test with an empty default registry."""
    findforge.reset()
    yield
    findforge.reset()


@pytest.fixture
def users():
    """In-memory User store."""
    return InMemoryModel(User)


@pytest.fixture
def engine():
    """In-memory SQLite engine with a users table, shared across connections."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata = MetaData()
    Table(
        "users",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("email", String(120)),
        Column("name", String(120)),
        Column("password", String(120)),
        Column("reference", String(64)),
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
