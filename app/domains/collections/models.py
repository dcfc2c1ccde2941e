import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.shared.database.connection import Base


class Collection(Base):
    __tablename__ = "collections"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    uuid = Column(
        String(36), unique=True, nullable=False, default=lambda: str(uuid.uuid4())
    )
    name = Column(String(255), unique=True, nullable=False, index=True)
    image = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    is_name_modified = Column(Boolean, default=False, nullable=False)
    user_address = Column(
        String(64), ForeignKey("users.address"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="collections")
    nfts = relationship("NFT", back_populates="collection")
