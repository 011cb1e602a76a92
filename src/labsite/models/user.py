from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, relationship

from labsite.db.base import Base
from labsite.models.enums.user_role import UserRole
from labsite.models.role import Role

users_roles_association_table = Table(
    "users_roles",
    Base.metadata,
    Column("user_id", ForeignKey("users.id"), primary_key=True),
    Column("role_id", ForeignKey("roles.id"), primary_key=True),
)

if TYPE_CHECKING:
    from labsite.models.researcher import Researcher


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    affiliation = Column(String, nullable=True)
    image = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    creation_date = Column(Date, nullable=False, default=date.today)
    modification_date = Column(Date, nullable=False, default=date.today, onupdate=date.today)

    role_objs: Mapped[list[Role]] = relationship("Role", secondary=users_roles_association_table, backref="users")
    researcher: Mapped[Optional["Researcher"]] = relationship(back_populates="user", uselist=False)

    @property
    def roles(self) -> list[UserRole]:
        role_objs = self.role_objs or []
        return [role_obj.name for role_obj in role_objs if role_obj.name is not None]
