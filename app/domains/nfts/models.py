from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.shared.database.connection import Base


class NFT(Base):
    __tablename__ = "nfts"

    token_id = Column(Integer, primary_key=True, autoincrement=False, index=True)
    item_id = Column(Integer, unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    blockchain_type = Column(String(50), nullable=True)
    erc_type = Column(String(50), nullable=True)
    image = Column(String(500), nullable=True)  # file url
    animation_url = Column(String(500), nullable=True)  # multimedia file url
    likes = Column(Integer, default=0, nullable=False)

    owner_address = Column(
        String(64), ForeignKey("users.address"), nullable=False, index=True
    )
    creator_address = Column(
        String(64), ForeignKey("users.address"), nullable=False, index=True
    )
    collection_id = Column(
        Integer, ForeignKey("collections.id"), nullable=False, index=True
    )

    # market state
    price = Column(Integer, default=0, nullable=False)
    is_on_sale = Column(Boolean, default=False, nullable=False)
    is_on_lease = Column(Boolean, default=False, nullable=False)
    is_on_auction = Column(Boolean, default=False, nullable=False)
    start_sale_date = Column(DateTime(timezone=True), nullable=True)
    end_sale_date = Column(DateTime(timezone=True), nullable=True)

    # metadata, immutable once is_metadata_frozen is set
    is_metadata_frozen = Column(Boolean, default=False, nullable=False)
    is_sensitive_content = Column(Boolean, default=False, nullable=False)
    sale_type = Column(String(50), nullable=True)
    collectible_category = Column(String(100), nullable=True)
    product_key_access_token_category = Column(String(100), nullable=True)
    product_key_virtual_asset_category = Column(String(100), nullable=True)
    descriptions = Column(JSON, default=list, nullable=False)
    properties_key = Column(JSON, default=list, nullable=False)
    properties_value = Column(JSON, default=list, nullable=False)
    images_key = Column(JSON, default=list, nullable=False)
    images_value = Column(JSON, default=list, nullable=False)
    levels_key = Column(JSON, default=list, nullable=False)
    levels_value_num = Column(JSON, default=list, nullable=False)
    levels_value_den = Column(JSON, default=list, nullable=False)
    images = Column(JSON, default=list, nullable=False)
    external_url = Column(String(500), nullable=True)
    youtube_url = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    attributes = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship(
        "User", back_populates="owned_nfts", foreign_keys=[owner_address]
    )
    creator = relationship(
        "User", back_populates="created_nfts", foreign_keys=[creator_address]
    )
    collection = relationship("Collection", back_populates="nfts")
    reviews = relationship(
        "Review",
        back_populates="nft",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
