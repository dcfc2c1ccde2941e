"""Tests for the NFT endpoints."""

from conftest import BUYER, OWNER

from app.domains.nfts.models import NFT
from app.domains.reviews.models import Review
from app.shared.utils.token_ids import encode_token_ids

API = "/api/v1/nfts"

METADATA_KEYS = [
    "name",
    "image",
    "animationUrl",
    "saleType",
    "collectibleCategory",
    "isSensitiveContent",
    "descriptions",
    "images",
    "externalUrl",
    "youtubeUrl",
    "description",
    "attributes",
]


def nft_payload(**overrides):
    payload = {
        "address": OWNER,
        "name": "Sunrise",
        "blockchainType": "ethereum",
        "image": "https://example.com/sunrise.png",
        "animationUrl": None,
        "tokenId": 1,
        "itemId": 1,
        "collection": "collection-1",
        "ercType": "ERC721",
    }
    payload.update(overrides)
    return payload


def batch_payload(**overrides):
    payload = {
        "address": OWNER,
        "names": ["One", "Two", "Three"],
        "blockchainType": "ethereum",
        "images": ["https://example.com/1.png", "", "https://example.com/3.png"],
        "animationUrls": [None, None, "https://example.com/3.mp4"],
        "tokenIds": [1, 2, 3],
        "itemIds": [11, 12, 13],
        "collection": "collection-1",
        "ercType": "ERC721",
    }
    payload.update(overrides)
    return payload


def market_payload(**overrides):
    payload = {
        "price": 150,
        "isOnSale": True,
        "isOnLease": False,
        "isOnAuction": False,
        "startSaleDate": "2026-01-01T00:00:00",
        "endSaleDate": "2026-02-01T00:00:00",
        "saleType": "fixed",
        "descriptions": ["limited edition"],
        "images": ["https://example.com/extra.png"],
        "externalUrl": "https://example.com",
        "youtubeUrl": "",
        "description": "A brand new description",
        "attributes": [{"trait_type": "color", "value": "red"}],
    }
    payload.update(overrides)
    return payload


# creation


def test_create_nft(client, collection):
    response = client.post(API, json=nft_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["tokenId"] == 1
    assert body["owner"]["address"] == OWNER
    assert body["creator"]["address"] == OWNER
    assert body["collection"]["name"] == "collection-1"
    assert body["price"] == 0
    assert body["isOnSale"] is False
    assert body["isOnLease"] is False
    assert body["isOnAuction"] is False
    assert body["startSaleDate"] is None
    assert body["likes"] == 0
    assert body["descriptions"] == []
    assert body["reviews"] == []


def test_create_nft_accepts_empty_image(client, collection):
    response = client.post(API, json=nft_payload(image=""))

    assert response.status_code == 200
    assert response.json()["image"] == ""


def test_create_nft_rejects_invalid_image(client, collection):
    response = client.post(API, json=nft_payload(image="sunrise.png"))

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid image")


def test_create_nft_requires_collection(client, users):
    response = client.post(API, json=nft_payload(collection="missing"))

    assert response.status_code == 400
    assert "missing" in response.json()["error"]


def test_create_nft_requires_user(client, collection):
    response = client.post(API, json=nft_payload(address="0xnobody"))

    assert response.status_code == 400
    assert "0xnobody" in response.json()["error"]


def test_create_nft_with_taken_token_id(client, collection, make_nft):
    make_nft(1, collection.id, item_id=99)

    response = client.post(API, json=nft_payload())

    assert response.status_code == 400
    assert "already uses" in response.json()["error"]


def test_create_nft_missing_fields_is_a_bad_request(client, collection):
    response = client.post(API, json={"name": "No token"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_create_multiple_nfts(client, collection):
    response = client.post(f"{API}/multiple", json=batch_payload())

    assert response.status_code == 200
    assert [nft["tokenId"] for nft in response.json()] == [1, 2, 3]
    assert [nft["itemId"] for nft in response.json()] == [11, 12, 13]


def test_create_multiple_with_mismatched_lengths_creates_nothing(client, db, collection):
    response = client.post(
        f"{API}/multiple",
        json=batch_payload(images=["https://example.com/1.png", "https://example.com/2.png"]),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "The length of the given values are different"}
    assert db.query(NFT).count() == 0


def test_create_multiple_checks_every_url(client, db, collection):
    response = client.post(
        f"{API}/multiple",
        json=batch_payload(images=["not-a-url", "", "https://example.com/3.png"]),
    )

    assert response.status_code == 400
    assert db.query(NFT).count() == 0


def test_create_multiple_with_one_taken_id_creates_nothing(client, db, collection, make_nft):
    make_nft(3, collection.id, item_id=99)

    response = client.post(f"{API}/multiple", json=batch_payload())

    assert response.status_code == 400
    assert db.query(NFT).count() == 1


# reads


def test_get_nft_with_reviews(client, collection, make_nft, add_review):
    make_nft(7, collection.id)
    add_review(7, rating=3, title="Okay")

    response = client.get(f"{API}/7")

    assert response.status_code == 200
    assert response.json()["reviews"] == [
        {"rating": 3, "comment": "Nice piece", "title": "Okay"}
    ]


def test_get_unknown_nft(client, users):
    response = client.get(f"{API}/404")

    assert response.status_code == 400
    assert response.json() == {"error": "NFT with tokenId 404 does not exist"}


def test_list_nfts(client, collection, make_nft):
    make_nft(2, collection.id)
    make_nft(1, collection.id)

    response = client.get(API)

    assert response.status_code == 200
    assert [nft["tokenId"] for nft in response.json()] == [1, 2]


def test_get_multiple_keeps_order_and_missing_ids(client, collection, make_nft):
    make_nft(5, collection.id)
    make_nft(7, collection.id)

    response = client.get(f"{API}/multiple/{encode_token_ids([5, 9999, 7])}")

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 3
    assert body[0]["tokenId"] == 5
    assert body[1] is None
    assert body[2]["tokenId"] == 7


def test_get_multiple_with_malformed_ids(client, users):
    response = client.get(f"{API}/multiple/5,abc")

    assert response.status_code == 400


# market state


def test_put_on_market_updates_market_state_and_metadata(client, collection, make_nft):
    make_nft(1, collection.id)

    response = client.put(f"{API}/on-market/1", json=market_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["price"] == 150
    assert body["isOnSale"] is True
    assert body["startSaleDate"].startswith("2026-01-01")
    assert body["saleType"] == "fixed"
    assert body["description"] == "A brand new description"
    assert body["images"] == ["https://example.com/extra.png"]


def test_put_on_market_ignores_metadata_when_frozen(client, collection, make_nft):
    make_nft(
        1,
        collection.id,
        is_metadata_frozen=True,
        sale_type="auction",
        description="Original",
        descriptions=["first"],
    )
    before = client.get(f"{API}/1").json()

    response = client.put(f"{API}/on-market/1", json=market_payload(isOnAuction=True))

    assert response.status_code == 200
    after = response.json()
    assert after["price"] == 150
    assert after["isOnSale"] is True
    assert after["isOnAuction"] is True
    for key in METADATA_KEYS:
        assert after[key] == before[key], key


def test_put_on_market_rejects_invalid_urls(client, collection, make_nft):
    make_nft(1, collection.id)

    response = client.put(f"{API}/on-market/1", json=market_payload(youtubeUrl="youtube"))

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid youtubeUrl")


def test_put_on_market_replaces_the_whole_market_state(client, collection, make_nft):
    make_nft(1, collection.id, price=10, is_on_sale=True)

    response = client.put(f"{API}/on-market/1", json={"price": 25})

    assert response.status_code == 200
    assert response.json()["price"] == 25
    assert response.json()["isOnSale"] is False


def test_take_off_market_resets_market_state(client, collection, make_nft):
    make_nft(1, collection.id)
    client.put(f"{API}/on-market/1", json=market_payload(isOnLease=True))

    response = client.put(f"{API}/off-market/1")

    assert response.status_code == 200
    body = response.json()
    assert body["price"] == 0
    assert body["isOnSale"] is False
    assert body["isOnLease"] is False
    assert body["isOnAuction"] is False
    assert body["startSaleDate"] is None
    assert body["endSaleDate"] is None
    assert body["description"] == "A brand new description"


# edit / transfer / delete


def test_edit_nft_in_place_keeps_likes_and_reviews(client, db, collection, make_nft, add_review):
    make_nft(1, collection.id, likes=2, blockchain_type="ethereum", erc_type="ERC721")
    add_review(1)
    client.put(
        "/api/v1/collections/change-info/collection-1",
        json={"newName": "Other", "isSameName": False},
    )
    client.post(f"/api/v1/collections/{OWNER}")

    response = client.put(
        f"{API}/edit/1",
        json={
            "name": "Sunset",
            "image": "https://example.com/sunset.png",
            "collection": "collection-2",
            "descriptions": ["edited"],
            "isMetadataFrozen": True,
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Sunset"
    assert body["image"] == "https://example.com/sunset.png"
    assert body["collection"]["name"] == "collection-2"
    assert body["isMetadataFrozen"] is True
    assert body["tokenId"] == 1
    assert body["itemId"] == 1
    assert body["blockchainType"] == "ethereum"
    assert body["ercType"] == "ERC721"
    assert body["owner"]["address"] == OWNER
    assert body["likes"] == 2
    assert len(body["reviews"]) == 1


def test_edit_frozen_nft_is_refused(client, collection, make_nft):
    make_nft(1, collection.id, is_metadata_frozen=True)

    response = client.put(f"{API}/edit/1", json={"name": "Nope", "collection": "collection-1"})

    assert response.status_code == 400
    assert response.json() == {"error": "NFT with tokenId 1 has its metadata frozen"}
    assert client.get(f"{API}/1").json()["name"] == "Token #1"


def test_edit_unknown_collection(client, collection, make_nft):
    make_nft(1, collection.id)

    response = client.put(f"{API}/edit/1", json={"name": "Nope", "collection": "missing"})

    assert response.status_code == 400
    assert "missing" in response.json()["error"]


def test_edit_null_clears_optional_fields(client, collection, make_nft):
    make_nft(
        1,
        collection.id,
        animation_url="https://example.com/a.mp4",
        external_url="https://example.com",
        description="Old description",
        descriptions=["kept"],
    )

    response = client.put(
        f"{API}/edit/1",
        json={
            "name": "Renamed",
            "animationUrl": None,
            "externalUrl": None,
            "descriptions": None,
            "collection": "collection-1",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Renamed"
    assert body["animationUrl"] is None
    assert body["externalUrl"] is None
    # left out of the payload, so untouched
    assert body["description"] == "Old description"
    # cannot be null, so the stored list stays
    assert body["descriptions"] == ["kept"]


def test_edit_unknown_nft(client, collection):
    response = client.put(f"{API}/edit/5", json={"name": "Nope", "collection": "collection-1"})

    assert response.status_code == 400
    assert response.json() == {"error": "NFT with tokenId 5 does not exist"}


def test_transfer_changes_owner_and_resets_market_state(client, collection, make_nft, add_review):
    make_nft(
        1,
        collection.id,
        description="Keep me",
        descriptions=["a", "b"],
        properties_key=["eyes"],
        properties_value=["blue"],
    )
    add_review(1)
    client.put(f"{API}/on-market/1", json=market_payload(isOnAuction=True))
    before = client.get(f"{API}/1").json()

    response = client.put(f"{API}/transfer/1", json={"address": BUYER})

    assert response.status_code == 200
    after = response.json()
    assert after["owner"]["address"] == BUYER
    assert after["creator"]["address"] == OWNER
    assert after["collection"]["name"] == "collection-1"
    assert after["isOnSale"] is False
    assert after["isOnLease"] is False
    assert after["isOnAuction"] is False
    assert after["price"] == 0
    for key in METADATA_KEYS + ["propertiesKey", "propertiesValue", "isMetadataFrozen"]:
        assert after[key] == before[key], key
    assert len(after["reviews"]) == 1


def test_transfer_unknown_nft(client, users):
    response = client.put(f"{API}/transfer/8", json={"address": BUYER})

    assert response.status_code == 400
    assert response.json() == {"error": "NFT with tokenId 8 does not exist"}


def test_transfer_to_unknown_user_leaves_nft_untouched(client, collection, make_nft):
    make_nft(1, collection.id)

    response = client.put(f"{API}/transfer/1", json={"address": "0xnobody"})

    assert response.status_code == 400
    assert client.get(f"{API}/1").json()["owner"]["address"] == OWNER


def test_delete_nft_removes_its_reviews(client, db, collection, make_nft, add_review):
    make_nft(1, collection.id)
    add_review(1)

    response = client.delete(f"{API}/1")

    assert response.status_code == 200
    assert response.json() == {"message": "Deleted the NFT: 1"}
    assert client.get(f"{API}/1").status_code == 400
    assert db.query(NFT).count() == 0
    assert db.query(Review).count() == 0


def test_delete_unknown_nft(client, users):
    response = client.delete(f"{API}/3")

    assert response.status_code == 400

