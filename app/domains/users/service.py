import logging
from typing import Tuple

from sqlalchemy.orm import Session

from app.domains.nfts.models import NFT
from app.domains.users import models, schemas
from app.shared.database.utils import commit_or_rollback
from app.shared.errors import Conflict, NotFound
from app.shared.validators import ensure_url

logger = logging.getLogger(__name__)

_LINK_FIELDS = (
    "image",
    "main_link",
    "facebook_link",
    "instagram_link",
    "linked_in_link",
    "twitter_link",
)


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def _require_user(self, address: str, for_update: bool = False) -> models.User:
        query = self.db.query(models.User).filter(models.User.address == address)
        if for_update:
            query = query.with_for_update()
        user = query.first()
        if user is None:
            raise NotFound(f"Cannot find the user: {address}")
        return user

    def _require_nft(self, token_id: int) -> NFT:
        nft = (
            self.db.query(NFT)
            .filter(NFT.token_id == token_id)
            .with_for_update()
            .first()
        )
        if nft is None:
            raise NotFound(f"NFT with tokenId {token_id} does not exist")
        return nft

    def get_user_by_address(self, address: str) -> models.User:
        return self._require_user(address)

    def update_user(self, address: str, payload: schemas.UserUpdate) -> models.User:
        update_data = payload.model_dump(exclude_unset=True)
        for field in _LINK_FIELDS:
            ensure_url(update_data.get(field), field)

        user = self._require_user(address)

        # Check that email / user name are not used by someone else
        for field in ("email", "user_name"):
            value = update_data.get(field)
            if value is None:
                continue
            existing = (
                self.db.query(models.User)
                .filter(getattr(models.User, field) == value)
                .filter(models.User.address != address)
                .first()
            )
            if existing:
                raise Conflict(f"{field} {value} is already registered")

        for field, value in update_data.items():
            setattr(user, field, value)
        commit_or_rollback(self.db, f"Error on updating user: {address}")
        self.db.refresh(user)
        return user

    def like_nft(self, token_id: int, address: str) -> Tuple[NFT, models.User]:
        """
        Register a like of ``address`` on an NFT.

        The like counter and the user's liked list are written in one
        transaction: both change or neither does.
        """
        nft = self._require_nft(token_id)
        user = self._require_user(address, for_update=True)
        liked = list(user.liked_nfts or [])
        if token_id in liked:
            raise Conflict(f"User has already liked the NFT with tokenId {token_id}")

        nft.likes = nft.likes + 1
        user.liked_nfts = liked + [token_id]
        commit_or_rollback(self.db, f"Error occurred while liking NFT: {token_id}")

        self.db.refresh(nft)
        self.db.refresh(user)
        logger.info(f"User {address} liked NFT {token_id}, likes: {nft.likes}")
        return nft, user

    def unlike_nft(self, token_id: int, address: str) -> Tuple[NFT, models.User]:
        nft = self._require_nft(token_id)
        if nft.likes <= 0:
            raise Conflict(f"NFT with tokenId {token_id} has 0 or less likes")
        user = self._require_user(address, for_update=True)
        liked = list(user.liked_nfts or [])
        if token_id not in liked:
            raise Conflict(f"tokenId {token_id} not part of user's liked NFTs")

        nft.likes = nft.likes - 1
        user.liked_nfts = [liked_id for liked_id in liked if liked_id != token_id]
        commit_or_rollback(self.db, f"Error occurred while unliking NFT: {token_id}")

        self.db.refresh(nft)
        self.db.refresh(user)
        logger.info(f"User {address} unliked NFT {token_id}, likes: {nft.likes}")
        return nft, user
