from typing import TYPE_CHECKING

from sqlalchemy import Column, Enum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, relationship

from labsite.db.base import Base
from labsite.models.enums.video import VideoAuthorRole

if TYPE_CHECKING:
    from labsite.models.author import Author
    from labsite.models.video import Video


class VideoAuthorAssociation(Base):
    __tablename__ = "video_authors"
    __table_args__ = (UniqueConstraint("video_id", "order", name="uq_video_authors_order"),)

    video_id = Column(Integer, ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True)
    author_id = Column(Integer, ForeignKey("authors.id"), primary_key=True, index=True)
    order = Column(Integer, nullable=False)
    role = Column(
        Enum(VideoAuthorRole, create_constraint=True, length=32, native_enum=False, validate_strings=True),
        nullable=True,
    )

    video: Mapped["Video"] = relationship(back_populates="author_associations")
    author: Mapped["Author"] = relationship(back_populates="video_associations")
