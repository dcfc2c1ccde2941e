import logging
import uuid
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.config import settings
from app.domains.collections import models, schemas
from app.domains.nfts.models import NFT
from app.domains.users.models import User
from app.shared.database.utils import commit_or_rollback
from app.shared.errors import BadRequest, Conflict, NotFound, ServerError
from app.shared.validators import ensure_url

logger = logging.getLogger(__name__)

NAME_PREFIX = "collection-"

_FULL_PROJECTION = (
    selectinload(models.Collection.user),
    selectinload(models.Collection.nfts).selectinload(NFT.reviews),
)


def sequential_name(collection_id: int) -> str:
    return f"{NAME_PREFIX}{collection_id}"


class CollectionService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(models.Collection).options(*_FULL_PROJECTION)

    def _require_collection(self, name: str) -> models.Collection:
        collection = (
            self.db.query(models.Collection)
            .filter(models.Collection.name == name)
            .first()
        )
        if not collection:
            raise NotFound(f"Cannot find the collection: {name}")
        return collection

    def _pending_collection(self, address: str):
        """The address's sequentially named collection that nobody touched yet"""
        return (
            self.db.query(models.Collection)
            .filter(models.Collection.user_address == address)
            .filter(models.Collection.is_name_modified.is_(False))
            .filter(models.Collection.name.startswith(NAME_PREFIX))
            .filter(~models.Collection.nfts.any())
            .order_by(models.Collection.id)
            .first()
        )

    def _allocate(self, address: str) -> models.Collection:
        """
        Insert a collection and name it after the id the database assigned.

        The id comes from the table's sequence, so concurrent creates never
        compute the same name.
        """
        placeholder = str(uuid.uuid4())
        collection = models.Collection(
            uuid=placeholder,
            name=f"pending-{placeholder}",
            user_address=address,
            is_name_modified=False,
        )
        self.db.add(collection)
        try:
            self.db.flush()
            collection.name = sequential_name(collection.id)
            self.db.flush()
        except IntegrityError:
            # Nothing else is pending in this unit of work
            self.db.rollback()
            raise
        return collection

    def create_collection(self, address: str) -> models.Collection:
        if not address or address == settings.empty_address:
            raise BadRequest("user address is empty")
        if not self.db.query(User).filter(User.address == address).first():
            raise NotFound(f"Cannot find the user: {address}")

        pending = self._pending_collection(address)
        if pending:
            return pending

        try:
            collection = self._allocate(address)
        except IntegrityError:
            # Someone renamed a collection to the generated name, take the next id
            logger.warning(f"Collection name clash for {address}, retrying once")
            try:
                collection = self._allocate(address)
            except IntegrityError as e:
                logger.error(f"Could not allocate a collection name for {address}: {e}")
                raise ServerError(
                    "Error in the server while allocating the next collection name"
                )

        commit_or_rollback(self.db, f"Error while creating a collection for {address}")
        logger.info(f"Created collection {collection.name} for {address}")
        return self.get_collection(collection.name)

    def get_collection(self, name: str) -> models.Collection:
        collection = self._query().filter(models.Collection.name == name).first()
        if not collection:
            raise NotFound(f"No collection with the name {name} is found")
        return collection

    def list_collections(self) -> List[models.Collection]:
        return self._query().order_by(models.Collection.id).all()

    def update_collection(
        self, name: str, payload: schemas.CollectionUpdate
    ) -> models.Collection:
        ensure_url(payload.image, "image url")

        collection = self._require_collection(name)

        new_name = payload.new_name
        if new_name is not None and new_name != name:
            # isSameName only skips the lookup; the unique index still applies
            if not payload.is_same_name:
                existing = (
                    self.db.query(models.Collection)
                    .filter(models.Collection.name == new_name)
                    .first()
                )
                if existing:
                    raise Conflict(f"Collection with the name {new_name} already exists")
            collection.name = new_name

        update_data = payload.model_dump(
            include={"image", "description"}, exclude_unset=True
        )
        for field, value in update_data.items():
            setattr(collection, field, value)
        collection.is_name_modified = True

        commit_or_rollback(self.db, f"Error on updating collection: {name}")
        return self.get_collection(collection.name)

    def delete_collection(self, name: str) -> None:
        collection = self._require_collection(name)
        nft_count = (
            self.db.query(NFT).filter(NFT.collection_id == collection.id).count()
        )
        if nft_count > 0:
            raise Conflict(
                f"Collection {name} contains one or more NFTs, "
                "the collection must be empty in order it to be deleted"
            )
        self.db.delete(collection)
        commit_or_rollback(self.db, f"Error in the server while deleting collection: {name}")
        logger.info(f"Deleted collection {name}")
