from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.domains.collections import schemas
from app.domains.collections.service import CollectionService
from app.shared.database.connection import get_db
from app.shared.utils.response import MessageResponse

router = APIRouter(prefix="/collections", tags=["collections"])


@router.get("", response_model=List[schemas.CollectionResponse])
def list_collections(db: Session = Depends(get_db)):
    service = CollectionService(db)
    return service.list_collections()


@router.post("/{address}", response_model=schemas.CollectionResponse)
def create_collection(address: str, db: Session = Depends(get_db)):
    """
    Create the next sequentially named collection for a wallet

    Calling it again before the collection is renamed or receives an NFT
    returns the same collection.

    **Possible errors:**
    - 400: Empty address, unknown user
    """
    service = CollectionService(db)
    return service.create_collection(address)


@router.put("/change-info/{name}", response_model=schemas.CollectionResponse)
def update_collection(
    name: str,
    payload: schemas.CollectionUpdate,
    db: Session = Depends(get_db),
):
    """
    Rename a collection and/or change its image and description

    **Possible errors:**
    - 400: Collection not found, invalid image url, new name already taken
    """
    service = CollectionService(db)
    return service.update_collection(name, payload)


@router.get("/{name}", response_model=schemas.CollectionResponse)
def get_collection(name: str, db: Session = Depends(get_db)):
    service = CollectionService(db)
    return service.get_collection(name)


@router.delete("/{name}", response_model=MessageResponse)
def delete_collection(name: str, db: Session = Depends(get_db)):
    """
    Delete an empty collection

    **Possible errors:**
    - 400: Collection not found, collection still contains NFTs
    """
    service = CollectionService(db)
    service.delete_collection(name)
    return MessageResponse(message=f"Deleted the collection: {name}")
