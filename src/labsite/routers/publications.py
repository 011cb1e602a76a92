import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, selectinload

from labsite import deps
from labsite.lib.authentication import UserData
from labsite.lib.authorization import require_author_editor
from labsite.lib.logging import LoggedRoute
from labsite.lib.logging.context import logging_context, save_to_logging_context
from labsite.lib.publications import create_publication
from labsite.lib.search_cache import AuthorSearchCache
from labsite.models.publication import Publication
from labsite.models.publication_author import PublicationAuthorAssociation
from labsite.routers.shared import (
    ACCESS_CONTROL_ERROR_RESPONSES,
    BASE_422_RESPONSE,
    PUBLIC_ERROR_RESPONSES,
    ROUTER_BASE_PREFIX,
)
from labsite.view_models import publication

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/publications",
    tags=["Publications"],
    responses={**PUBLIC_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

logger = logging.getLogger(__name__)


@router.get(
    "/{item_id}",
    status_code=200,
    response_model=publication.Publication,
    summary="Fetch a publication by id",
)
def fetch_publication(*, item_id: int, db: Session = Depends(deps.get_db)) -> Any:
    """
    Fetch a single publication with its authors in order.
    """
    save_to_logging_context({"requested_resource": item_id})
    item = (
        db.query(Publication)
        .options(selectinload(Publication.author_associations).joinedload(PublicationAuthorAssociation.author))
        .filter(Publication.id == item_id)
        .one_or_none()
    )

    if not item:
        logger.debug(msg="The requested publication does not exist.", extra=logging_context())
        raise HTTPException(status_code=404, detail=f"Publication with ID {item_id} not found")

    return item


@router.post(
    "",
    status_code=201,
    response_model=publication.Publication,
    responses={**ACCESS_CONTROL_ERROR_RESPONSES, **BASE_422_RESPONSE},
    summary="Create a publication",
)
def add_publication(
    *,
    item_create: publication.PublicationCreate,
    db: Session = Depends(deps.get_db),
    cache: AuthorSearchCache = Depends(deps.get_author_search_cache),
    user_data: UserData = Depends(require_author_editor),
) -> Any:
    """
    Create a publication. Each author is matched to an existing researcher or author where
    possible; new standalone authors are created for the rest.
    """
    item = create_publication(db, item_create, creator=user_data.user, cache=cache)
    db.commit()
    db.refresh(item)
    return item
