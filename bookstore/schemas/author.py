"""Author Schemas — creation payload with whitespace-stripped names."""

from pydantic import Field, field_validator

from bookstore.schemas.common import CamelModel


class AuthorCreate(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v
