# Import all models here so Base.metadata knows every table
from app.domains.collections.models import Collection
from app.domains.nfts.models import NFT
from app.domains.reviews.models import Review
from app.domains.users.models import User

__all__ = ["Collection", "NFT", "Review", "User"]
