# tests/conftest.py
import os

# baza w pamieci i bez opoznien, zanim zaimportujemy cokolwiek z aplikacji
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["SEARCH_DEBOUNCE_SECONDS"] = "0"

from decimal import Decimal

import pytest

from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import ProductModel, ProfileModel
from tests.fakes import FakeEmbeddingClient, FakeNotifier


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_product(db):
    def _make(**kwargs):
        defaults = {
            "name": "Keyboard",
            "description": "Mechanical keyboard",
            "price": Decimal("199.99"),
            "stock_quantity": 10,
            "category": "Electronics",
            "seller_id": "seller-1",
        }
        defaults.update(kwargs)
        product = ProductModel(**defaults)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def make_profile(db):
    def _make(profile_id, role="customer", full_name="Jan Kowalski", email=None, address=None):
        profile = ProfileModel(
            id=profile_id,
            role=role,
            full_name=full_name,
            email=email or f"{profile_id}@example.com",
            address=address,
        )
        db.add(profile)
        db.commit()
        return profile

    return _make


@pytest.fixture
def fake_embeddings():
    return FakeEmbeddingClient()


@pytest.fixture
def notifier():
    return FakeNotifier()
