"""Synthetic review records with uniformly random ids and ratings."""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Callable, Optional

from review_loader.core.errors import ConfigurationError
from review_loader.models.reviews import COMMENT_PLACEHOLDER, ReviewRecord

RATING_MIN = 1
RATING_MAX = 5


def now_utc() -> datetime:
    """Current UTC datetime."""
    return datetime.now(timezone.utc)


class ReviewGenerator:
    """Produce one ``ReviewRecord`` per call.

    ``rng`` and ``clock`` are injectable so tests can make the output
    deterministic.
    """

    def __init__(
        self,
        product_max: int = 1000,
        user_max: int = 100_000,
        comment: str = COMMENT_PLACEHOLDER,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        if product_max < 1:
            raise ConfigurationError(f"invalid_product_max: {product_max}")
        if user_max < 1:
            raise ConfigurationError(f"invalid_user_max: {user_max}")
        self.product_max = product_max
        self.user_max = user_max
        self.comment = comment
        self.rng = rng or random.Random()
        self.clock = clock

    def __call__(self) -> ReviewRecord:
        return ReviewRecord(
            product_id=self.rng.randint(1, self.product_max),
            user_id=self.rng.randint(1, self.user_max),
            rating=self.rng.randint(RATING_MIN, RATING_MAX),
            comment=self.comment,
            created_at=self.clock(),
        )
