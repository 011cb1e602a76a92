from typing import Any, Generator

from sqlalchemy.orm import Session

from labsite.db.session import SessionLocal
from labsite.lib.search_cache import AuthorSearchCache

author_search_cache = AuthorSearchCache()


def get_db() -> Generator[Session, Any, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_author_search_cache() -> AuthorSearchCache:
    return author_search_cache
