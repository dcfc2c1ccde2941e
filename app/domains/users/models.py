from sqlalchemy import JSON, Boolean, Column, DateTime, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.shared.database.connection import Base


class User(Base):
    __tablename__ = "users"

    address = Column(String(64), primary_key=True, index=True)  # wallet address
    email = Column(String(255), unique=True, nullable=True)
    user_name = Column(String(100), unique=True, nullable=True)
    company_name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    image = Column(String(500), nullable=True)
    main_link = Column(String(500), nullable=True)
    facebook_link = Column(String(500), nullable=True)
    instagram_link = Column(String(500), nullable=True)
    linked_in_link = Column(String(500), nullable=True)
    twitter_link = Column(String(500), nullable=True)
    verified = Column(Boolean, default=False, nullable=False)
    verification_date = Column(DateTime(timezone=True), nullable=True)
    role = Column(String(50), default="USER", nullable=False)
    liked_nfts = Column(JSON, default=list, nullable=False)  # tokenIds
    cart_nfts = Column(JSON, default=list, nullable=False)  # tokenIds
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    collections = relationship("Collection", back_populates="user")
    owned_nfts = relationship(
        "NFT", back_populates="owner", foreign_keys="NFT.owner_address"
    )
    created_nfts = relationship(
        "NFT", back_populates="creator", foreign_keys="NFT.creator_address"
    )
