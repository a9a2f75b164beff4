"""Book Schemas — catalog create/update payloads and responses."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bookstore.core.domain_types import MAX_ID


class BookCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    author: str = Field("", max_length=200)
    isbn: str = Field("", max_length=20)
    genre: str = Field("", max_length=100)
    price: float = Field(0.0, ge=0)
    quantity: int = Field(0, ge=0, le=MAX_ID)
    description: str = Field("", max_length=10_000)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class BookUpdate(BookCreate):
    """Full replacement of the editable fields."""


class BookResponse(BaseModel):
    id: int
    title: str
    author: str
    isbn: str
    genre: str
    price: float
    quantity: int
    description: str

    model_config = ConfigDict(from_attributes=True)
