from typing import Any, Dict

MARKET_STATE_FIELDS = (
    "price",
    "is_on_sale",
    "is_on_lease",
    "is_on_auction",
    "start_sale_date",
    "end_sale_date",
)

METADATA_FIELDS = (
    "name",
    "image",
    "animation_url",
    "sale_type",
    "collectible_category",
    "product_key_access_token_category",
    "product_key_virtual_asset_category",
    "is_sensitive_content",
    "descriptions",
    "properties_key",
    "properties_value",
    "images_key",
    "images_value",
    "levels_key",
    "levels_value_num",
    "levels_value_den",
    "images",
    "external_url",
    "youtube_url",
    "description",
    "attributes",
)

# metadata columns that cannot hold NULL; a null for them leaves the value as is
REQUIRED_METADATA_FIELDS = frozenset(
    (
        "name",
        "is_sensitive_content",
        "descriptions",
        "properties_key",
        "properties_value",
        "images_key",
        "images_value",
        "levels_key",
        "levels_value_num",
        "levels_value_den",
        "images",
    )
)


def unlisted_market_state() -> Dict[str, Any]:
    """Market state of an NFT that is neither on sale, on lease nor on auction"""
    return {
        "price": 0,
        "is_on_sale": False,
        "is_on_lease": False,
        "is_on_auction": False,
        "start_sale_date": None,
        "end_sale_date": None,
    }


def empty_metadata_arrays() -> Dict[str, Any]:
    return {
        "descriptions": [],
        "properties_key": [],
        "properties_value": [],
        "images_key": [],
        "images_value": [],
        "levels_key": [],
        "levels_value_num": [],
        "levels_value_den": [],
        "images": [],
    }
