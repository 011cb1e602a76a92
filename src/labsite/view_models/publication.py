from datetime import date
from typing import Optional

from pydantic import field_validator, model_validator

from labsite.lib.validation.publication import (
    validate_contiguous_author_orders,
    validate_doi,
    validate_link,
    validate_title,
)
from labsite.models.enums.publication_type import PublicationType
from labsite.view_models import record_type_validator, set_record_type
from labsite.view_models.author import Author, PublicationAuthorCandidate
from labsite.view_models.base.base import BaseModel


class PublicationBase(BaseModel):
    title: str
    type: PublicationType
    abstract: Optional[str] = None
    link: Optional[str] = None
    doi: Optional[str] = None
    venue: Optional[str] = None
    publication_date: Optional[date] = None


class PublicationCreate(PublicationBase):
    """View model for creating a publication together with its ordered author list."""

    authors: list[PublicationAuthorCandidate]

    @field_validator("title")
    def title_is_long_enough(cls, v: str) -> str:
        return validate_title(v)

    @field_validator("doi")
    def doi_is_valid(cls, v: Optional[str]) -> Optional[str]:
        return validate_doi(v)

    @field_validator("link")
    def link_is_valid(cls, v: Optional[str]) -> Optional[str]:
        return validate_link(v)

    @model_validator(mode="after")
    def authors_are_ordered(self):
        if not self.authors:
            raise ValueError("A publication needs at least one author.")
        validate_contiguous_author_orders(author.order for author in self.authors)
        return self


class PublicationAuthor(BaseModel):
    author: Author
    order: int
    contribution: Optional[str] = None
    is_corresponding: bool

    class Config:
        from_attributes = True


class SavedPublication(PublicationBase):
    record_type: str = None  # type: ignore
    id: int
    creator_id: Optional[int] = None
    creation_date: date
    modification_date: date
    authors: list[PublicationAuthor]

    _record_type_factory = record_type_validator()(set_record_type)

    class Config:
        from_attributes = True

    @model_validator(mode="before")
    def authors_from_associations(cls, data):
        # ORM publications expose their ordered links as `author_associations`.
        if hasattr(data, "author_associations"):
            return {
                **{field: getattr(data, field, None) for field in cls.model_fields if field != "authors"},
                "authors": list(data.author_associations),
            }
        return data


class Publication(SavedPublication):
    """Publication view model."""

    pass
