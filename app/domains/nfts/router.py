from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.domains.users.schemas import LikeRequest
from app.domains.users.service import UserService
from app.shared.database.connection import get_db
from app.shared.utils.response import MessageResponse

from . import schemas
from .services import NFTService

router = APIRouter(prefix="/nfts", tags=["NFTs"])


@router.get("", response_model=List[schemas.NFTResponse])
def list_nfts(db: Session = Depends(get_db)):
    return NFTService(db).list_nfts()


@router.post("", response_model=schemas.NFTResponse)
def create_nft(payload: schemas.NFTCreate, db: Session = Depends(get_db)):
    """
    Create one NFT owned and created by ``address``

    **Possible errors:**
    - 400: Invalid image / animationUrl, unknown user or collection,
      tokenId or itemId already used
    """
    return NFTService(db).create_nft(payload)


@router.post("/multiple", response_model=List[schemas.NFTResponse])
def create_nfts(payload: schemas.NFTCreateMany, db: Session = Depends(get_db)):
    """
    Create a batch of NFTs in one collection

    Either every NFT of the batch is created or none is.

    **Possible errors:**
    - 400: Arrays of different lengths, invalid URLs, unknown user or collection
    """
    return NFTService(db).create_nfts(payload)


@router.get("/multiple/{encoded_ids}", response_model=List[Optional[schemas.NFTResponse]])
def get_nfts_by_encoded_ids(encoded_ids: str, db: Session = Depends(get_db)):
    """
    Fetch several NFTs from a comma separated list of tokenIds

    The response keeps the order of the ids; unknown ids come back as null.
    """
    return NFTService(db).get_nfts_by_encoded_ids(encoded_ids)


@router.put("/on-market/{token_id}", response_model=schemas.NFTResponse)
def put_on_market(
    token_id: int, payload: schemas.NFTMarketUpdate, db: Session = Depends(get_db)
):
    """
    List an NFT for sale, lease or auction

    The payload replaces the whole market state: price, isOnSale, isOnLease,
    isOnAuction, startSaleDate and endSaleDate fall back to their unlisted
    defaults when left out. Metadata in the payload is ignored once the NFT's
    metadata is frozen.
    """
    return NFTService(db).put_on_market(token_id, payload)


@router.put("/off-market/{token_id}", response_model=schemas.NFTResponse)
def take_off_market(token_id: int, db: Session = Depends(get_db)):
    return NFTService(db).take_off_market(token_id)


@router.put("/edit/{token_id}", response_model=schemas.NFTResponse)
def edit_nft(token_id: int, payload: schemas.NFTEdit, db: Session = Depends(get_db)):
    """
    Edit the metadata of an NFT

    **Possible errors:**
    - 400: Metadata frozen, NFT or collection not found, invalid URLs
    """
    return NFTService(db).edit_nft(token_id, payload)


@router.put("/transfer/{token_id}", response_model=schemas.NFTResponse)
def transfer_nft(
    token_id: int, payload: schemas.NFTTransfer, db: Session = Depends(get_db)
):
    """
    Change the owner of an NFT and take it off the market

    **Possible errors:**
    - 400: NFT or new owner not found
    """
    return NFTService(db).transfer_nft(token_id, payload)


@router.get("/likes/{token_id}", response_model=schemas.NFTLikesResponse)
def get_likes(token_id: int, db: Session = Depends(get_db)):
    return schemas.NFTLikesResponse(likes=NFTService(db).get_likes(token_id))


@router.put("/likes/{token_id}", response_model=schemas.NFTLikeResponse)
def like_nft(token_id: int, payload: LikeRequest, db: Session = Depends(get_db)):
    """
    **Possible errors:**
    - 400: NFT or user not found, NFT already liked by the user
    """
    nft, user = UserService(db).like_nft(token_id, payload.address)
    return {"nft": nft, "user": user}


@router.put("/unlikes/{token_id}", response_model=schemas.NFTLikeResponse)
def unlike_nft(token_id: int, payload: LikeRequest, db: Session = Depends(get_db)):
    """
    **Possible errors:**
    - 400: NFT or user not found, NFT has no likes, NFT not liked by the user
    """
    nft, user = UserService(db).unlike_nft(token_id, payload.address)
    return {"nft": nft, "user": user}


@router.get("/{token_id}", response_model=schemas.NFTResponse)
def get_nft(token_id: int, db: Session = Depends(get_db)):
    return NFTService(db).get_nft(token_id)


@router.delete("/{token_id}", response_model=MessageResponse)
def delete_nft(token_id: int, db: Session = Depends(get_db)):
    NFTService(db).delete_nft(token_id)
    return MessageResponse(message=f"Deleted the NFT: {token_id}")
