import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.base import Base
from db.deps import get_db
from main import app
from models.split_rules import FieldDefinition, ProductField, ProductSplitRule


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    testing_session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _override_get_db():
        session = testing_session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def add_field(db, field_id: str, label: str) -> None:
    db.add(FieldDefinition(id=field_id, label=label))


def add_value(db, product_id: str, field_id: str, value: str) -> None:
    db.add(
        ProductField(
            id=f"{product_id}:{field_id}:{value}",
            product_id=product_id,
            field_id=field_id,
            value=value,
        )
    )


def add_rule(db, rule_id: str, product_id: str, field_ids: list[str]) -> None:
    db.add(ProductSplitRule(id=rule_id, product_id=product_id, split_by_field=field_ids))


@pytest.fixture
def seed_color_size(db):
    """prod1: Color {Blue, Red}, Size {L, M, S}, one rule over both."""
    add_field(db, "f_color", "Color")
    add_field(db, "f_size", "Size")
    for value in ("Red", "Blue"):
        add_value(db, "prod1", "f_color", value)
    for value in ("S", "M", "L"):
        add_value(db, "prod1", "f_size", value)
    add_rule(db, "rule1", "prod1", ["f_size", "f_color"])
    db.commit()
    return db
