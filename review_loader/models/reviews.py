from datetime import datetime, timezone
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

COMMENT_PLACEHOLDER = "Sample review comment"

# column order used by both INSERT and COPY
# created_at is a plain TIMESTAMP column and is always written as naive UTC
REVIEW_COLUMNS = ("product_id", "user_id", "rating", "comment", "created_at")


class ReviewRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: int = Field(ge=1)
    user_id: int = Field(ge=1)
    rating: int = Field(ge=1, le=5)
    comment: str = COMMENT_PLACEHOLDER
    created_at: datetime

    def created_at_utc(self) -> datetime:
        if self.created_at.tzinfo is None:
            return self.created_at
        return self.created_at.astimezone(timezone.utc).replace(tzinfo=None)

    def as_row(self) -> Tuple[int, int, int, str, datetime]:
        return (
            self.product_id,
            self.user_id,
            self.rating,
            self.comment,
            self.created_at_utc(),
        )


class LoadReport(BaseModel):
    total_batches: int
    batches_completed: int = 0
    rows_inserted: int = 0
    cancelled: bool = False
    elapsed: float = 0.0

    @property
    def rate(self) -> int:
        if self.elapsed <= 0:
            return 0
        return int(self.rows_inserted / self.elapsed)
