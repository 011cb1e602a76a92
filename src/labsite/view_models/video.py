from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from labsite.lib.validation.constants import MAX_VIDEO_SERIES_LENGTH
from labsite.lib.validation.publication import validate_unique_author_orders
from labsite.lib.validation.video import validate_video_description, validate_video_title, validate_youtube_url
from labsite.models.enums.video import VideoAuthorRole, VideoCategory
from labsite.view_models import record_type_validator, set_record_type
from labsite.view_models.author import Author, OrderedAuthorCandidate
from labsite.view_models.base.base import BaseModel


class VideoAuthorCandidate(OrderedAuthorCandidate):
    role: Optional[VideoAuthorRole] = None


class VideoBase(BaseModel):
    title: str
    description: Optional[str] = None
    youtube_url: str
    published_at: datetime
    recorded_at: Optional[datetime] = None
    category: Optional[VideoCategory] = None
    series: Optional[str] = Field(None, max_length=MAX_VIDEO_SERIES_LENGTH)
    is_public: bool = True
    is_featured: bool = False


class VideoCreate(VideoBase):
    """View model for creating a video. Credited authors are optional; their orders must not repeat."""

    authors: list[VideoAuthorCandidate] = []

    @field_validator("title")
    def title_is_valid(cls, v: str) -> str:
        return validate_video_title(v)

    @field_validator("description")
    def description_is_valid(cls, v: Optional[str]) -> Optional[str]:
        return validate_video_description(v)

    @field_validator("youtube_url")
    def youtube_url_is_valid(cls, v: str) -> str:
        return validate_youtube_url(v)

    @model_validator(mode="after")
    def author_orders_are_unique(self):
        validate_unique_author_orders(author.order for author in self.authors)
        return self


class VideoAuthor(BaseModel):
    author: Author
    order: int
    role: Optional[VideoAuthorRole] = None

    class Config:
        from_attributes = True


class SavedVideo(VideoBase):
    record_type: str = None  # type: ignore
    id: int
    youtube_id: str
    creator_id: Optional[int] = None
    creation_date: date
    modification_date: date
    authors: list[VideoAuthor]

    _record_type_factory = record_type_validator()(set_record_type)

    class Config:
        from_attributes = True

    @model_validator(mode="before")
    def authors_from_associations(cls, data):
        if hasattr(data, "author_associations"):
            return {
                **{field: getattr(data, field, None) for field in cls.model_fields if field != "authors"},
                "authors": list(data.author_associations),
            }
        return data


class Video(SavedVideo):
    """Video view model."""

    pass
