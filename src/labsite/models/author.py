from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, relationship

from labsite.db.base import Base

if TYPE_CHECKING:
    from labsite.models.publication_author import PublicationAuthorAssociation
    from labsite.models.researcher import Researcher
    from labsite.models.video_author import VideoAuthorAssociation


class Author(Base):
    """
    A person credited on a publication or video. Rows without a researcher are standalone authors; a row
    gains a researcher once, when the person is linked to a research profile.

    Email and ORCID are unique when present. Emails are stored lowercased.
    """

    __tablename__ = "authors"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True, unique=True)
    affiliation = Column(String, nullable=True)
    orcid = Column(String(19), nullable=True, unique=True)
    researcher_id = Column(Integer, ForeignKey("researchers.id"), nullable=True, unique=True)
    creation_date = Column(Date, nullable=False, default=date.today)
    modification_date = Column(Date, nullable=False, default=date.today, onupdate=date.today)

    researcher: Mapped[Optional["Researcher"]] = relationship(back_populates="author")
    publication_associations: Mapped[list["PublicationAuthorAssociation"]] = relationship(back_populates="author")
    video_associations: Mapped[list["VideoAuthorAssociation"]] = relationship(back_populates="author")
