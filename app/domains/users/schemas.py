from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from app.shared.utils.response import CamelModel


class UserResponse(CamelModel):
    address: str
    email: Optional[str] = None
    user_name: Optional[str] = None
    company_name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    main_link: Optional[str] = None
    facebook_link: Optional[str] = None
    instagram_link: Optional[str] = None
    linked_in_link: Optional[str] = None
    twitter_link: Optional[str] = None
    verified: bool
    verification_date: Optional[datetime] = None
    role: str
    liked_nfts: List[int] = []
    cart_nfts: List[int] = []
    created_at: Optional[datetime] = None


class UserUpdate(CamelModel):
    email: Optional[EmailStr] = None
    user_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    company_name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=500)
    main_link: Optional[str] = Field(default=None, max_length=500)
    facebook_link: Optional[str] = Field(default=None, max_length=500)
    instagram_link: Optional[str] = Field(default=None, max_length=500)
    linked_in_link: Optional[str] = Field(default=None, max_length=500)
    twitter_link: Optional[str] = Field(default=None, max_length=500)


class LikeRequest(CamelModel):
    address: str = Field(..., min_length=1, description="Wallet address of the liker")
