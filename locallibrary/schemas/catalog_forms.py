"""Catalog Form Schemas - JSON bodies accepted by create/update routes.

Invariants:
    - Every field is optional at this layer; missing values reach the validators as None
    - BookForm.genre accepts one id or a list of ids
    - authorId/bookId accepted as aliases of author_id/book_id
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from locallibrary.core.domain_types import EntityKind


class AuthorForm(BaseModel):
    first_name: str | None = None
    family_name: str | None = None
    date_of_birth: str | None = None
    date_of_death: str | None = None


class GenreForm(BaseModel):
    name: str | None = None


class BookForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    author_id: str | None = Field(
        None, validation_alias=AliasChoices("author_id", "authorId"),
    )
    summary: str | None = None
    isbn: str | None = None
    genre: list[str] = Field(default_factory=list)

    @field_validator("genre", mode="before")
    @classmethod
    def genre_as_list(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


class BookInstanceForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    book_id: str | None = Field(
        None, validation_alias=AliasChoices("book_id", "bookId"),
    )
    imprint: str | None = None
    status: str | None = None
    due_back: str | None = None


FORM_SCHEMAS: dict[EntityKind, type[BaseModel]] = {
    EntityKind.AUTHOR: AuthorForm,
    EntityKind.GENRE: GenreForm,
    EntityKind.BOOK: BookForm,
    EntityKind.BOOK_INSTANCE: BookInstanceForm,
}
