import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from labsite import deps
from labsite.lib.author_search import (
    publication_counts,
    researcher_identity,
    search_author_candidates,
    standalone_author_identity,
)
from labsite.lib.authentication import UserData
from labsite.lib.authorization import require_author_editor
from labsite.lib.authors import AlreadyResearcher, AuthorCreated, AuthorCreationResult, create_author, resolve_author
from labsite.lib.logging import LoggedRoute
from labsite.lib.logging.context import logging_context, save_to_logging_context
from labsite.lib.search_cache import AuthorSearchCache
from labsite.lib.validation.constants import DEFAULT_AUTHOR_SEARCH_LIMIT, MAX_AUTHOR_SEARCH_LIMIT
from labsite.models.author import Author
from labsite.routers.shared import (
    ACCESS_CONTROL_ERROR_RESPONSES,
    BASE_409_RESPONSE,
    BASE_422_RESPONSE,
    PUBLIC_ERROR_RESPONSES,
    ROUTER_BASE_PREFIX,
)
from labsite.view_models import author

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/authors",
    tags=["Authors"],
    responses={**PUBLIC_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

logger = logging.getLogger(__name__)


def conflict_detail(db: Session, result: AuthorCreationResult) -> dict:
    if isinstance(result, AlreadyResearcher):
        researcher = result.researcher
        counts = publication_counts(db, [researcher.author.id] if researcher.author is not None else [])
        existing: Any = researcher_identity(researcher, counts)
    else:
        existing = standalone_author_identity(result.existing, publication_counts(db, [result.existing.id]))

    conflict = author.AuthorConflict(
        conflict=result.conflict,
        message=result.message,
        suggestion=result.suggestion,
        existing=existing,
    )
    return conflict.model_dump(by_alias=True, mode="json")


@router.get(
    "/search",
    status_code=200,
    response_model=list[author.AuthorIdentity],
    responses={**BASE_422_RESPONSE},
    summary="Search researchers and standalone authors",
)
def search_authors(
    *,
    query: str = Query(..., min_length=1),
    limit: int = Query(DEFAULT_AUTHOR_SEARCH_LIMIT, ge=1, le=MAX_AUTHOR_SEARCH_LIMIT),
    db: Session = Depends(deps.get_db),
    cache: AuthorSearchCache = Depends(deps.get_author_search_cache),
) -> Any:
    """
    Search researchers and standalone authors by name, email, affiliation or ORCID iD.
    """
    return search_author_candidates(db, query, limit, cache=cache)


@router.get(
    "/{item_id}",
    status_code=200,
    response_model=author.Author,
    summary="Fetch an author by id",
)
def fetch_author(*, item_id: int, db: Session = Depends(deps.get_db)) -> Any:
    """
    Fetch a single author by id.
    """
    save_to_logging_context({"requested_resource": item_id})
    item = db.query(Author).filter(Author.id == item_id).one_or_none()

    if not item:
        logger.debug(msg="The requested author does not exist.", extra=logging_context())
        raise HTTPException(status_code=404, detail=f"Author with ID {item_id} not found")

    return item


@router.post(
    "",
    status_code=201,
    response_model=author.Author,
    responses={**ACCESS_CONTROL_ERROR_RESPONSES, **BASE_409_RESPONSE, **BASE_422_RESPONSE},
    summary="Create a standalone author",
)
def create_standalone_author(
    *,
    item_create: author.AuthorCandidate,
    db: Session = Depends(deps.get_db),
    cache: AuthorSearchCache = Depends(deps.get_author_search_cache),
    user_data: UserData = Depends(require_author_editor),
) -> Any:
    """
    Create a new standalone author. Responds with 409 and an explanation if the ORCID iD or email
    already belongs to an author or researcher, or if a similar author exists.
    """
    result = create_author(db, item_create, cache=cache)

    if not isinstance(result, AuthorCreated):
        save_to_logging_context({"author_conflict": result.conflict})
        raise HTTPException(status_code=409, detail=conflict_detail(db, result))

    db.commit()
    db.refresh(result.author)
    return result.author


@router.post(
    "/resolve",
    status_code=200,
    response_model=author.AuthorResolution,
    responses={**ACCESS_CONTROL_ERROR_RESPONSES, **BASE_422_RESPONSE},
    summary="Resolve an author candidate",
)
def resolve_author_candidate(
    *,
    item_resolve: author.AuthorCandidate,
    db: Session = Depends(deps.get_db),
    cache: AuthorSearchCache = Depends(deps.get_author_search_cache),
    user_data: UserData = Depends(require_author_editor),
) -> Any:
    """
    Find the author a candidate refers to, creating a standalone author if nobody matches.
    """
    resolution = resolve_author(db, item_resolve, cache=cache)
    db.commit()
    db.refresh(resolution.author)
    return author.AuthorResolution.model_validate(resolution, from_attributes=True)
