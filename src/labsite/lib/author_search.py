import logging
from typing import Iterable, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from labsite.lib.logging.context import logging_context, save_to_logging_context
from labsite.lib.search_cache import AuthorSearchCache
from labsite.lib.validation.constants import DEFAULT_AUTHOR_SEARCH_LIMIT, MAX_AUTHOR_SEARCH_LIMIT
from labsite.lib.validation.exceptions import ValidationError
from labsite.models.author import Author
from labsite.models.publication_author import PublicationAuthorAssociation
from labsite.models.researcher import Researcher
from labsite.models.user import User
from labsite.view_models.author import AuthorIdentity, ResearcherIdentity, StandaloneAuthorIdentity

logger = logging.getLogger(__name__)


def publication_counts(db: Session, author_ids: Iterable[int]) -> dict[int, int]:
    """Count the publications of each author. Authors without publications are omitted."""
    author_ids = list(author_ids)
    if not author_ids:
        return {}

    rows = (
        db.query(PublicationAuthorAssociation.author_id, func.count(PublicationAuthorAssociation.publication_id))
        .filter(PublicationAuthorAssociation.author_id.in_(author_ids))
        .group_by(PublicationAuthorAssociation.author_id)
        .all()
    )
    return {author_id: count for author_id, count in rows}


def researcher_identity(researcher: Researcher, counts: dict[int, int]) -> ResearcherIdentity:
    count = counts.get(researcher.author.id, 0) if researcher.author is not None else 0
    return ResearcherIdentity.model_validate(researcher).model_copy(update={"publication_count": count})


def standalone_author_identity(author: Author, counts: dict[int, int]) -> StandaloneAuthorIdentity:
    count = counts.get(author.id, 0)
    return StandaloneAuthorIdentity.model_validate(author).model_copy(update={"publication_count": count})


def search_researchers(db: Session, query: str, limit: int) -> list[Researcher]:
    return (
        db.query(Researcher)
        .join(Researcher.user)
        .options(joinedload(Researcher.user), joinedload(Researcher.author))
        .filter(
            or_(
                User.name.icontains(query, autoescape=True),
                User.email.icontains(query, autoescape=True),
                User.affiliation.icontains(query, autoescape=True),
                Researcher.orcid.icontains(query, autoescape=True),
            )
        )
        .order_by(Researcher.id)
        .limit(limit)
        .all()
    )


def search_standalone_authors(db: Session, query: str, limit: int) -> list[Author]:
    return (
        db.query(Author)
        .filter(Author.researcher_id.is_(None))
        .filter(
            or_(
                Author.name.icontains(query, autoescape=True),
                Author.email.icontains(query, autoescape=True),
                Author.affiliation.icontains(query, autoescape=True),
                Author.orcid.icontains(query, autoescape=True),
            )
        )
        .order_by(Author.id)
        .limit(limit)
        .all()
    )


def search_author_candidates(
    db: Session,
    query: Optional[str],
    limit: int = DEFAULT_AUTHOR_SEARCH_LIMIT,
    cache: Optional[AuthorSearchCache] = None,
) -> list[AuthorIdentity]:
    """
    Autocomplete over researchers and standalone authors. Half of ``limit`` (rounded down) is given
    to each group; researchers come first. The two groups are not deduplicated against each other.
    """
    query = query.strip() if query is not None else ""
    if not query:
        raise ValidationError("Search query is required.", field="query")
    if not 1 <= limit <= MAX_AUTHOR_SEARCH_LIMIT:
        raise ValidationError(f"Search limit must be between 1 and {MAX_AUTHOR_SEARCH_LIMIT}.", field="limit")

    save_to_logging_context({"author_search": {"query": query, "limit": limit}})

    key = AuthorSearchCache.key(query, limit)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            logger.debug(msg="Serving author search from cache.", extra=logging_context())
            return cached

    group_limit = limit // 2
    researchers = search_researchers(db, query, group_limit) if group_limit else []
    authors = search_standalone_authors(db, query, group_limit) if group_limit else []

    counts = publication_counts(
        db, [author.id for author in authors] + [r.author.id for r in researchers if r.author is not None]
    )

    results: list[AuthorIdentity] = [researcher_identity(researcher, counts) for researcher in researchers]
    results.extend(standalone_author_identity(author, counts) for author in authors)

    save_to_logging_context({"author_search_results": {"researchers": len(researchers), "authors": len(authors)}})
    logger.debug(msg="Searched for author candidates.", extra=logging_context())

    if cache is not None:
        cache.set(key, results)

    return results
