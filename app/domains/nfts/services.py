import logging
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from app.domains.collections.models import Collection
from app.domains.users.models import User
from app.shared.database.utils import commit_or_rollback
from app.shared.errors import BadRequest, Conflict, NotFound
from app.shared.utils.token_ids import decode_token_ids
from app.shared.validators import ensure_url, ensure_urls

from . import schemas
from .initializers import (
    MARKET_STATE_FIELDS,
    METADATA_FIELDS,
    REQUIRED_METADATA_FIELDS,
    empty_metadata_arrays,
    unlisted_market_state,
)
from .models import NFT

logger = logging.getLogger(__name__)

_FULL_PROJECTION = (
    selectinload(NFT.owner),
    selectinload(NFT.creator),
    selectinload(NFT.collection),
    selectinload(NFT.reviews),
)


class NFTService:
    def __init__(self, db: Session):
        self.db = db

    # lookups

    def _query(self):
        return self.db.query(NFT).options(*_FULL_PROJECTION)

    def _require_nft(self, token_id: int, for_update: bool = False) -> NFT:
        query = self.db.query(NFT).filter(NFT.token_id == token_id)
        if for_update:
            query = query.with_for_update()
        nft = query.first()
        if not nft:
            raise NotFound(f"NFT with tokenId {token_id} does not exist")
        return nft

    def _require_user(self, address: str) -> User:
        user = self.db.query(User).filter(User.address == address).first()
        if not user:
            raise NotFound(f"Cannot find the user: {address}")
        return user

    def _require_collection(self, name: str) -> Collection:
        collection = (
            self.db.query(Collection).filter(Collection.name == name).first()
        )
        if not collection:
            raise NotFound(f"Collection with name {name} does not exist")
        return collection

    def _ensure_ids_free(self, token_ids: List[int], item_ids: List[int]) -> None:
        taken = (
            self.db.query(NFT.token_id)
            .filter((NFT.token_id.in_(token_ids)) | (NFT.item_id.in_(item_ids)))
            .first()
        )
        if taken:
            raise Conflict(
                f"NFT {taken.token_id} already uses one of the given tokenIds or itemIds"
            )

    # reads

    def get_nft(self, token_id: int) -> NFT:
        nft = self._query().filter(NFT.token_id == token_id).first()
        if not nft:
            raise NotFound(f"NFT with tokenId {token_id} does not exist")
        return nft

    def list_nfts(self) -> List[NFT]:
        return self._query().order_by(NFT.token_id).all()

    def get_nfts_by_token_ids(self, token_ids: List[int]) -> List[Optional[NFT]]:
        """
        Look up several NFTs at once.

        The result follows the order of ``token_ids``; unknown ids yield None
        instead of being dropped.
        """
        if not token_ids:
            return []
        found = {
            nft.token_id: nft
            for nft in self._query().filter(NFT.token_id.in_(set(token_ids))).all()
        }
        return [found.get(token_id) for token_id in token_ids]

    def get_nfts_by_encoded_ids(self, encoded: str) -> List[Optional[NFT]]:
        return self.get_nfts_by_token_ids(decode_token_ids(encoded))

    def get_likes(self, token_id: int) -> int:
        return self._require_nft(token_id).likes

    # creation

    def _build_nft(
        self,
        *,
        owner: User,
        collection: Collection,
        name: str,
        token_id: int,
        item_id: int,
        image: Optional[str],
        animation_url: Optional[str],
        blockchain_type: Optional[str],
        erc_type: Optional[str],
    ) -> NFT:
        return NFT(
            token_id=token_id,
            item_id=item_id,
            name=name,
            image=image,
            animation_url=animation_url,
            blockchain_type=blockchain_type,
            erc_type=erc_type,
            owner_address=owner.address,
            creator_address=owner.address,
            collection_id=collection.id,
            likes=0,
            is_metadata_frozen=False,
            **unlisted_market_state(),
            **empty_metadata_arrays(),
        )

    def create_nft(self, payload: schemas.NFTCreate) -> NFT:
        ensure_url(payload.image, "image")
        ensure_url(payload.animation_url, "animationUrl")

        owner = self._require_user(payload.address)
        collection = self._require_collection(payload.collection)
        self._ensure_ids_free([payload.token_id], [payload.item_id])

        nft = self._build_nft(
            owner=owner,
            collection=collection,
            name=payload.name,
            token_id=payload.token_id,
            item_id=payload.item_id,
            image=payload.image,
            animation_url=payload.animation_url,
            blockchain_type=payload.blockchain_type,
            erc_type=payload.erc_type,
        )
        self.db.add(nft)
        commit_or_rollback(self.db, f"Error while creating the token {payload.token_id}")
        logger.info(f"Created NFT {nft.token_id} in collection {collection.name}")
        return self.get_nft(nft.token_id)

    def create_nfts(self, payload: schemas.NFTCreateMany) -> List[NFT]:
        count = len(payload.names)
        lengths = {
            len(payload.images),
            len(payload.animation_urls),
            len(payload.token_ids),
            len(payload.item_ids),
        }
        if lengths != {count}:
            raise BadRequest("The length of the given values are different")
        if count == 0:
            raise BadRequest("No NFTs given")
        if len(set(payload.token_ids)) != count or len(set(payload.item_ids)) != count:
            raise BadRequest("The given tokenIds and itemIds must be unique")

        ensure_urls(payload.images, "images")
        ensure_urls(payload.animation_urls, "animationUrls")

        owner = self._require_user(payload.address)
        collection = self._require_collection(payload.collection)
        self._ensure_ids_free(payload.token_ids, payload.item_ids)

        nfts = [
            self._build_nft(
                owner=owner,
                collection=collection,
                name=name,
                token_id=token_id,
                item_id=item_id,
                image=image,
                animation_url=animation_url,
                blockchain_type=payload.blockchain_type,
                erc_type=payload.erc_type,
            )
            for name, image, animation_url, token_id, item_id in zip(
                payload.names,
                payload.images,
                payload.animation_urls,
                payload.token_ids,
                payload.item_ids,
            )
        ]
        self.db.add_all(nfts)
        # all rows or none
        commit_or_rollback(self.db, "Error while creating the tokens")
        logger.info(f"Created {count} NFTs in collection {collection.name}")
        return [
            nft
            for nft in self.get_nfts_by_token_ids(payload.token_ids)
            if nft is not None
        ]

    # market state

    def put_on_market(self, token_id: int, payload: schemas.NFTMarketUpdate) -> NFT:
        """
        Update the market state of an NFT.

        Metadata sent along is only written while the NFT's metadata is not
        frozen; on a frozen NFT it is ignored and only the market state changes.
        """
        ensure_urls(payload.images, "images")
        ensure_url(payload.external_url, "externalUrl")
        ensure_url(payload.youtube_url, "youtubeUrl")

        nft = self._require_nft(token_id, for_update=True)

        for field, value in payload.model_dump(include=set(MARKET_STATE_FIELDS)).items():
            setattr(nft, field, value)

        if not nft.is_metadata_frozen:
            metadata = payload.model_dump(
                include=set(METADATA_FIELDS), exclude_unset=True, exclude_none=True
            )
            for field, value in metadata.items():
                setattr(nft, field, value)

        commit_or_rollback(self.db, f"Error while putting token {token_id} on sale")
        return self.get_nft(token_id)

    def take_off_market(self, token_id: int) -> NFT:
        nft = self._require_nft(token_id, for_update=True)
        for field, value in unlisted_market_state().items():
            setattr(nft, field, value)
        commit_or_rollback(self.db, f"Error while putting token {token_id} off sale")
        return self.get_nft(token_id)

    # ownership and metadata

    def edit_nft(self, token_id: int, payload: schemas.NFTEdit) -> NFT:
        """
        Rewrite the metadata of an NFT in place.

        tokenId, itemId, blockchainType, ercType, owner, creator, likes and
        reviews are kept. Fields left out of the payload keep their value; an
        explicit null clears a nullable field.
        """
        ensure_url(payload.image, "image")
        ensure_url(payload.animation_url, "animationUrl")
        ensure_urls(payload.images, "images")
        ensure_url(payload.external_url, "externalUrl")
        ensure_url(payload.youtube_url, "youtubeUrl")

        nft = self._require_nft(token_id, for_update=True)
        collection = self._require_collection(payload.collection)
        if nft.is_metadata_frozen:
            raise Conflict(f"NFT with tokenId {token_id} has its metadata frozen")

        metadata = payload.model_dump(include=set(METADATA_FIELDS), exclude_unset=True)
        for field, value in metadata.items():
            if value is None and field in REQUIRED_METADATA_FIELDS:
                continue
            setattr(nft, field, value)
        if payload.is_metadata_frozen is not None:
            nft.is_metadata_frozen = payload.is_metadata_frozen
        nft.collection_id = collection.id

        commit_or_rollback(self.db, f"Error while updating the token {token_id}")
        return self.get_nft(token_id)

    def transfer_nft(self, token_id: int, payload: schemas.NFTTransfer) -> NFT:
        """
        Hand an NFT over to another user.

        Creator, collection and metadata stay as they are; any active sale,
        lease or auction is cleared.
        """
        nft = self._require_nft(token_id, for_update=True)
        new_owner = self._require_user(payload.address)
        previous_owner = nft.owner_address

        nft.owner_address = new_owner.address
        for field, value in unlisted_market_state().items():
            setattr(nft, field, value)

        commit_or_rollback(self.db, f"Error while transferring the token {token_id}")
        logger.info(f"Transferred NFT {token_id} from {previous_owner} to {new_owner.address}")
        return self.get_nft(token_id)

    def delete_nft(self, token_id: int) -> None:
        nft = self._require_nft(token_id)
        self.db.delete(nft)
        commit_or_rollback(self.db, f"Error in the server while deleting NFT: {token_id}")
        logger.info(f"Deleted NFT {token_id}")
