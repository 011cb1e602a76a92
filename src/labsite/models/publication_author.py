from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, relationship

from labsite.db.base import Base

if TYPE_CHECKING:
    from labsite.models.author import Author
    from labsite.models.publication import Publication


class PublicationAuthorAssociation(Base):
    __tablename__ = "publication_authors"
    __table_args__ = (UniqueConstraint("publication_id", "order", name="uq_publication_authors_order"),)

    publication_id = Column(Integer, ForeignKey("publications.id", ondelete="CASCADE"), primary_key=True)
    author_id = Column(Integer, ForeignKey("authors.id"), primary_key=True, index=True)
    order = Column(Integer, nullable=False)
    contribution = Column(String, nullable=True)
    is_corresponding = Column(Boolean, nullable=False, default=False)

    publication: Mapped["Publication"] = relationship(back_populates="author_associations")
    author: Mapped["Author"] = relationship(back_populates="publication_associations")
