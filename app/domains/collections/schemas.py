from typing import List, Optional

from pydantic import Field

from app.domains.nfts.schemas import CollectionSummary, NFTBase
from app.domains.reviews.schemas import ReviewResponse
from app.domains.users.schemas import UserResponse
from app.shared.utils.response import CamelModel


class CollectionNFT(NFTBase):
    reviews: List[ReviewResponse] = []


class CollectionResponse(CollectionSummary):
    user: UserResponse
    nfts: List[CollectionNFT] = []


class CollectionUpdate(CamelModel):
    new_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    image: Optional[str] = Field(default=None, max_length=500)
    description: Optional[str] = None
    is_same_name: bool = False
