import os

# Must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.domains.collections.models import Collection  # noqa: E402
from app.domains.nfts.models import NFT  # noqa: E402
from app.domains.reviews.models import Review  # noqa: E402
from app.domains.users.models import User  # noqa: E402
from app.main import app  # noqa: E402
from app.shared.database.connection import Base, SessionLocal, engine  # noqa: E402

OWNER = "0x1111111111111111111111111111111111111111"
BUYER = "0x2222222222222222222222222222222222222222"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def users(db):
    owner = User(address=OWNER, email="owner@example.com", user_name="owner")
    buyer = User(address=BUYER, email="buyer@example.com", user_name="buyer")
    db.add_all([owner, buyer])
    db.commit()
    return owner, buyer


@pytest.fixture
def collection(db, users):
    collection = Collection(name="collection-1", user_address=OWNER)
    db.add(collection)
    db.commit()
    return collection


@pytest.fixture
def make_nft(db):
    def _make_nft(token_id, collection_id, **fields):
        nft = NFT(
            token_id=token_id,
            item_id=fields.pop("item_id", token_id),
            name=fields.pop("name", f"Token #{token_id}"),
            owner_address=fields.pop("owner_address", OWNER),
            creator_address=OWNER,
            collection_id=collection_id,
            **fields,
        )
        db.add(nft)
        db.commit()
        return nft

    return _make_nft


@pytest.fixture
def add_review(db):
    def _add_review(token_id, rating=5, title="Great"):
        review = Review(token_id=token_id, rating=rating, title=title, comment="Nice piece")
        db.add(review)
        db.commit()
        return review

    return _add_review
