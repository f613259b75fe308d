"""
Product model used in recommendation lists.

``Product`` carries catalogue fields plus the scoring annotations a
recommendation list adds (relevance score and label, reason, rank).  It is
frozen; ``ranker.rank_products`` returns copies with ``rank`` filled in.

Derived views (``rating_text``, ``stock_status``) use the same band tables
as the scoring engine.  ``rating_text`` rounds the rating to the engine's
default precision before labelling, so it matches what
``ScoringEngine.compute("rating", ...)`` reports at that precision.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from commerce_scoring.errors import ValidationError
from commerce_scoring.scoring.bands import RATING_BANDS, STOCK_STATUS_BANDS
from commerce_scoring.scoring.engine import DEFAULT_PRECISION

LOW_STOCK_THRESHOLD = 10


class Product(BaseModel):
    """A catalogue product as returned in a recommendation list.

    Attributes:
        product_id:      Catalogue identifier.
        name:            Display name.
        description:     Short description.
        price:           Unit price, non-negative.
        category:        Category name.
        image_url:       Product image URL.
        rating:          Average star rating in [0, 5].
        stock_quantity:  Units on hand, non-negative.
        created_at:      Catalogue creation timestamp (UTC).
        relevance_score: Score from the variant's relevance strategy, or ``None``.
        relevance_label: Band label for ``relevance_score``.
        reason:          Fixed descriptive reason of the producing variant.
        rank:            1-based position after ranking, or ``None``.
    """

    model_config = ConfigDict(frozen=True)

    product_id: int
    name: str
    description: str = ""
    price: float
    category: str
    image_url: str = ""
    rating: float
    stock_quantity: int
    created_at: datetime
    relevance_score: Optional[float] = None
    relevance_label: Optional[str] = None
    reason: str = ""
    rank: Optional[int] = None

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"price must be non-negative, got {v}.")
        return v

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: float) -> float:
        if not 0.0 <= v <= 5.0:
            raise ValueError(f"rating must be in [0, 5], got {v}.")
        return v

    @field_validator("stock_quantity")
    @classmethod
    def validate_stock(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"stock_quantity must be non-negative, got {v}.")
        return v

    @property
    def is_in_stock(self) -> bool:
        return self.stock_quantity > 0

    @property
    def is_low_stock(self) -> bool:
        return 0 < self.stock_quantity < LOW_STOCK_THRESHOLD

    @property
    def rating_text(self) -> str:
        return str(RATING_BANDS.label(round(self.rating, DEFAULT_PRECISION)))

    @property
    def stock_status(self) -> str:
        return str(STOCK_STATUS_BANDS.label(self.stock_quantity))

    def discounted_price(self, discount_pct: float) -> float:
        """Price after a percentage discount, rounded to cents.

        Raises:
            ValidationError: If ``discount_pct`` is outside [0, 100].
        """
        if not 0 <= discount_pct <= 100:
            raise ValidationError(
                f"Discount percentage must be between 0 and 100, got {discount_pct}.",
                field="discount_pct",
            )
        return round(self.price * (1 - discount_pct / 100), 2)
