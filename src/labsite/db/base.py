from typing import Any, Dict, Union

from sqlalchemy import MetaData
from sqlalchemy.orm import as_declarative, declared_attr

class_registry: Dict = {}

# Stable constraint names, so migrations and unique-violation handling can refer to them.
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


@as_declarative(class_registry=class_registry, metadata=MetaData(naming_convention=NAMING_CONVENTION))
class Base:
    id: Any
    __name__: str

    # Declared this way so mypy sees a usable type for the generated table name.
    __tablename__: Union[declared_attr[Any], str] = declared_attr(lambda cls: cls.__name__.lower())
