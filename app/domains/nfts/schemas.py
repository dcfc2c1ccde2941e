from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from app.domains.reviews.schemas import ReviewResponse
from app.domains.users.schemas import UserResponse
from app.shared.utils.response import CamelModel


class CollectionSummary(CamelModel):
    uuid: str
    name: str
    image: Optional[str] = None
    description: Optional[str] = None
    is_name_modified: bool
    created_at: Optional[datetime] = None


class NFTBase(CamelModel):
    """Every stored NFT field, without relations"""

    token_id: int
    item_id: int
    name: str
    blockchain_type: Optional[str] = None
    erc_type: Optional[str] = None
    image: Optional[str] = None
    animation_url: Optional[str] = None
    likes: int = 0

    price: int = 0
    is_on_sale: bool = False
    is_on_lease: bool = False
    is_on_auction: bool = False
    start_sale_date: Optional[datetime] = None
    end_sale_date: Optional[datetime] = None

    is_metadata_frozen: bool = False
    is_sensitive_content: bool = False
    sale_type: Optional[str] = None
    collectible_category: Optional[str] = None
    product_key_access_token_category: Optional[str] = None
    product_key_virtual_asset_category: Optional[str] = None
    descriptions: List[Any] = []
    properties_key: List[Any] = []
    properties_value: List[Any] = []
    images_key: List[Any] = []
    images_value: List[Any] = []
    levels_key: List[Any] = []
    levels_value_num: List[Any] = []
    levels_value_den: List[Any] = []
    images: List[str] = []
    external_url: Optional[str] = None
    youtube_url: Optional[str] = None
    description: Optional[str] = None
    attributes: Optional[Any] = None

    created_at: Optional[datetime] = None


class NFTResponse(NFTBase):
    owner: UserResponse
    creator: UserResponse
    collection: CollectionSummary
    reviews: List[ReviewResponse] = []


class NFTLikesResponse(CamelModel):
    likes: int


class NFTLikeResponse(CamelModel):
    nft: NFTBase
    user: UserResponse


class NFTCreate(CamelModel):
    address: str = Field(..., min_length=1, description="Owner and creator wallet address")
    name: str = Field(..., min_length=1, max_length=255)
    blockchain_type: Optional[str] = None
    image: Optional[str] = ""
    animation_url: Optional[str] = None
    token_id: int
    item_id: int
    collection: str = Field(..., description="Name of the collection to link against")
    erc_type: Optional[str] = None


class NFTCreateMany(CamelModel):
    address: str = Field(..., min_length=1)
    names: List[str]
    blockchain_type: Optional[str] = None
    images: List[Optional[str]]
    animation_urls: List[Optional[str]]
    token_ids: List[int]
    item_ids: List[int]
    collection: str
    erc_type: Optional[str] = None


class NFTMetadataUpdate(CamelModel):
    """Metadata fields a caller may (re)write while metadata is not frozen"""

    sale_type: Optional[str] = None
    collectible_category: Optional[str] = None
    product_key_access_token_category: Optional[str] = None
    product_key_virtual_asset_category: Optional[str] = None
    is_sensitive_content: Optional[bool] = None
    descriptions: Optional[List[Any]] = None
    images: Optional[List[str]] = None
    external_url: Optional[str] = None
    youtube_url: Optional[str] = None
    description: Optional[str] = None
    attributes: Optional[Any] = None


class NFTMarketUpdate(NFTMetadataUpdate):
    price: int = Field(default=0, ge=0)
    is_on_sale: bool = False
    is_on_lease: bool = False
    is_on_auction: bool = False
    start_sale_date: Optional[datetime] = None
    end_sale_date: Optional[datetime] = None


class NFTEdit(NFTMetadataUpdate):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    image: Optional[str] = None
    animation_url: Optional[str] = None
    is_metadata_frozen: Optional[bool] = None
    collection: str


class NFTTransfer(CamelModel):
    address: str = Field(..., min_length=1, description="Wallet address of the new owner")
