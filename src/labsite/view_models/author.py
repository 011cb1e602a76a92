from typing import Annotated, Literal, Optional, Union

from pydantic import Field, field_validator

from labsite.lib.validation.author import (
    normalize_author_email,
    normalize_optional_text,
    normalize_orcid,
    validate_author_name,
)
from labsite.models.enums.author_match import AuthorMatchRule
from labsite.view_models import record_type_validator, set_record_type
from labsite.view_models.base.base import BaseModel, CamelModel


class AuthorCandidate(BaseModel):
    """
    Author data as supplied by a submission. Callers that already know the exact author row or the
    research profile of this person may pass ``author_id`` or ``researcher_id``.
    """

    name: str
    email: Optional[str] = None
    affiliation: Optional[str] = None
    orcid: Optional[str] = None
    researcher_id: Optional[int] = None
    author_id: Optional[int] = None

    @field_validator("name", mode="before")
    def validate_name(cls, v: Optional[str]) -> str:
        return validate_author_name(v)

    @field_validator("email")
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return normalize_author_email(v)

    @field_validator("orcid")
    def validate_orcid(cls, v: Optional[str]) -> Optional[str]:
        return normalize_orcid(v)

    @field_validator("affiliation")
    def validate_affiliation(cls, v: Optional[str]) -> Optional[str]:
        return normalize_optional_text(v)


class OrderedAuthorCandidate(AuthorCandidate):
    """An author candidate credited at a position in an author list."""

    order: int = Field(..., ge=0)


class PublicationAuthorCandidate(OrderedAuthorCandidate):
    contribution: Optional[str] = None
    is_corresponding: bool = False


class AuthorBase(BaseModel):
    name: str
    email: Optional[str] = None
    affiliation: Optional[str] = None
    orcid: Optional[str] = None


class SavedAuthor(AuthorBase):
    record_type: str = None  # type: ignore
    id: int
    researcher_id: Optional[int] = None

    _record_type_factory = record_type_validator()(set_record_type)

    class Config:
        from_attributes = True


class Author(SavedAuthor):
    """Author view model."""

    pass


class ResearcherIdentity(CamelModel):
    """A platform user with a research profile, as offered by author search."""

    type: Literal["researcher"] = "researcher"
    id: int
    user_id: int
    name: str
    email: Optional[str] = None
    affiliation: Optional[str] = None
    orcid: Optional[str] = None
    avatar_url: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    featured: bool = False
    publication_count: int = 0

    class Config:
        from_attributes = True


class StandaloneAuthorIdentity(CamelModel):
    """An author with no platform account, as offered by author search."""

    type: Literal["author"] = "author"
    id: int
    name: str
    email: Optional[str] = None
    affiliation: Optional[str] = None
    orcid: Optional[str] = None
    researcher_id: Optional[int] = None
    publication_count: int = 0

    class Config:
        from_attributes = True


AuthorIdentity = Annotated[Union[ResearcherIdentity, StandaloneAuthorIdentity], Field(discriminator="type")]


class AuthorResolution(BaseModel):
    author: Author
    rule: AuthorMatchRule
    created: bool


class AuthorConflict(BaseModel):
    """
    Why an author was not created and what the user should do instead. ``conflict`` is one of
    ``orcid``, ``email``, ``already_researcher`` or ``potential_duplicate``.
    """

    conflict: str
    message: str
    suggestion: str
    existing: Optional[AuthorIdentity] = None
