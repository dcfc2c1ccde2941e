from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.domains.users import schemas
from app.domains.users.service import UserService
from app.shared.database.connection import get_db

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{address}", response_model=schemas.UserResponse)
def read_user(address: str, db: Session = Depends(get_db)):
    user_service = UserService(db)
    return user_service.get_user_by_address(address)


@router.put("/{address}", response_model=schemas.UserResponse)
def update_user(address: str, payload: schemas.UserUpdate, db: Session = Depends(get_db)):
    """
    Edit the profile of a user

    **Possible errors:**
    - 400: User not found, invalid link URL, email or user name already taken
    """
    user_service = UserService(db)
    return user_service.update_user(address, payload)
