import logging
from typing import Optional

from sqlalchemy.orm import Session

from labsite.lib.authors import resolve_authors_for_publication
from labsite.lib.logging.context import logging_context, save_to_logging_context
from labsite.lib.search_cache import AuthorSearchCache
from labsite.lib.validation.publication import validate_contiguous_author_orders
from labsite.models.publication import Publication
from labsite.models.publication_author import PublicationAuthorAssociation
from labsite.models.user import User
from labsite.view_models.publication import PublicationCreate

logger = logging.getLogger(__name__)


def create_publication(
    db: Session,
    item_create: PublicationCreate,
    creator: Optional[User] = None,
    cache: Optional[AuthorSearchCache] = None,
) -> Publication:
    """
    Resolve the submitted authors and store the publication with its ordered author links. Author
    rows created here are rolled back together with the publication if anything fails. The session
    is flushed but not committed.
    """
    validate_contiguous_author_orders(author.order for author in item_create.authors)
    save_to_logging_context({"publication_title": item_create.title, "publication_authors": len(item_create.authors)})

    with db.begin_nested():
        resolved = resolve_authors_for_publication(db, item_create.authors, cache=cache)

        item = Publication(
            **item_create.model_dump(by_alias=False, exclude={"authors"}),
            creator_id=creator.id if creator is not None else None,
        )
        item.author_associations = [
            PublicationAuthorAssociation(
                author_id=resolved_author.author_id,
                order=resolved_author.candidate.order,
                contribution=resolved_author.candidate.contribution,
                is_corresponding=resolved_author.candidate.is_corresponding,
            )
            for resolved_author in resolved
        ]
        db.add(item)
        db.flush()

    save_to_logging_context({"created_publication": item.id})
    logger.info(msg="Created publication.", extra=logging_context())
    return item
