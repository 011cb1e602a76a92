from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Column, Date, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, relationship

from labsite.db.base import Base
from labsite.models.enums.publication_type import PublicationType

if TYPE_CHECKING:
    from labsite.models.publication_author import PublicationAuthorAssociation
    from labsite.models.user import User


class Publication(Base):
    __tablename__ = "publications"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    type = Column(
        Enum(PublicationType, create_constraint=True, length=32, native_enum=False, validate_strings=True),
        nullable=False,
    )
    abstract = Column(String, nullable=True)
    link = Column(String(500), nullable=True)
    doi = Column(String, nullable=True, index=True)
    venue = Column(String, nullable=True)
    publication_date = Column(Date, nullable=True, index=True)
    creator_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    creation_date = Column(Date, nullable=False, default=date.today)
    modification_date = Column(Date, nullable=False, default=date.today, onupdate=date.today)

    creator: Mapped[Optional["User"]] = relationship()
    author_associations: Mapped[list["PublicationAuthorAssociation"]] = relationship(
        back_populates="publication",
        cascade="all, delete-orphan",
        order_by="PublicationAuthorAssociation.order",
    )
