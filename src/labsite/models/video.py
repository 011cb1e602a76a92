from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, relationship

from labsite.db.base import Base
from labsite.models.enums.video import VideoCategory

if TYPE_CHECKING:
    from labsite.models.user import User
    from labsite.models.video_author import VideoAuthorAssociation


class Video(Base):
    """A recorded talk or interview hosted on YouTube. One row per YouTube video."""

    __tablename__ = "videos"

    id = Column(Integer, primary_key=True)
    title = Column(String(500), nullable=False)
    description = Column(String, nullable=True)
    youtube_url = Column(String(500), nullable=False)
    youtube_id = Column(String(50), nullable=False, unique=True)
    published_at = Column(DateTime, nullable=False, index=True)
    recorded_at = Column(DateTime, nullable=True)
    category = Column(
        Enum(VideoCategory, create_constraint=True, length=32, native_enum=False, validate_strings=True),
        nullable=True,
        index=True,
    )
    series = Column(String(255), nullable=True)
    is_public = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    creator_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    creation_date = Column(Date, nullable=False, default=date.today)
    modification_date = Column(Date, nullable=False, default=date.today, onupdate=date.today)

    creator: Mapped[Optional["User"]] = relationship()
    author_associations: Mapped[list["VideoAuthorAssociation"]] = relationship(
        back_populates="video",
        cascade="all, delete-orphan",
        order_by="VideoAuthorAssociation.order",
    )
