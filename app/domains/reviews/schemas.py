from typing import Optional

from app.shared.utils.response import CamelModel


class ReviewResponse(CamelModel):
    rating: int
    comment: Optional[str] = None
    title: Optional[str] = None
