from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, relationship

from labsite.db.base import Base

if TYPE_CHECKING:
    from labsite.models.author import Author
    from labsite.models.user import User


class Researcher(Base):
    """
    The research profile of a platform user. Name, email, affiliation and avatar belong to the
    user account; the profile adds title, bio, ORCID and whether the researcher is featured.
    """

    __tablename__ = "researchers"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    title = Column(String, nullable=True)
    bio = Column(String, nullable=True)
    orcid = Column(String(19), nullable=True, unique=True)
    featured = Column(Boolean, nullable=False, default=False)
    creation_date = Column(Date, nullable=False, default=date.today)
    modification_date = Column(Date, nullable=False, default=date.today, onupdate=date.today)

    user: Mapped["User"] = relationship(back_populates="researcher")
    author: Mapped[Optional["Author"]] = relationship(back_populates="researcher", uselist=False)

    @property
    def name(self) -> str:
        return self.user.name

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def affiliation(self) -> Optional[str]:
        return self.user.affiliation

    @property
    def avatar_url(self) -> Optional[str]:
        return self.user.image
