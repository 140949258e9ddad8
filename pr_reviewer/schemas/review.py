"""Review-related schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReviewFinding(BaseModel):
    """One entry of the model's ``reviews`` list."""

    model_config = ConfigDict(populate_by_name=True)

    line_number: str = Field(alias="lineNumber")
    review_comment: str = Field(alias="reviewComment")
    category: Optional[str] = None
    priority: Optional[str] = None

    @field_validator("line_number", mode="before")
    @classmethod
    def number_as_string(cls, value):
        # Models echo the number either quoted or bare
        if isinstance(value, bool):
            raise ValueError("lineNumber must be a string or a number")
        if isinstance(value, (int, float)):
            return str(value)
        return value


class ReviewResponse(BaseModel):
    reviews: list[ReviewFinding]


class ReviewComment(BaseModel):
    """Inline comment addressed by diff position, as the review API expects it."""

    path: str
    position: int
    body: str
