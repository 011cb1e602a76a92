import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from labsite.lib.authors import resolve_ordered_authors
from labsite.lib.exceptions import DuplicateVideoError
from labsite.lib.logging.context import format_raised_exception_info_as_dict, logging_context, save_to_logging_context
from labsite.lib.search_cache import AuthorSearchCache
from labsite.lib.validation.publication import validate_unique_author_orders
from labsite.lib.validation.video import extract_youtube_id
from labsite.models.user import User
from labsite.models.video import Video
from labsite.models.video_author import VideoAuthorAssociation
from labsite.view_models.video import VideoCreate

logger = logging.getLogger(__name__)


def find_video_by_youtube_id(db: Session, youtube_id: str) -> Optional[Video]:
    return db.query(Video).filter(Video.youtube_id == youtube_id).one_or_none()


def create_video(
    db: Session,
    item_create: VideoCreate,
    creator: Optional[User] = None,
    cache: Optional[AuthorSearchCache] = None,
) -> Video:
    """
    Store a video with its credited authors. Authors go through the same resolution chain as
    publication authors, and any author created here is rolled back with the video on failure.
    The session is flushed but not committed.

    Raises
    ------
    DuplicateVideoError
        If a video with the same YouTube id exists, including one stored by a concurrent request.
    ValidationError
        If author orders repeat or two credited authors are the same person.
    """
    validate_unique_author_orders(author.order for author in item_create.authors)

    youtube_id = extract_youtube_id(item_create.youtube_url)
    save_to_logging_context({"video_youtube_id": youtube_id, "video_authors": len(item_create.authors)})

    existing = find_video_by_youtube_id(db, youtube_id)
    if existing is not None:
        logger.info(msg="Declined to create video; the YouTube id is already stored.", extra=logging_context())
        raise DuplicateVideoError(youtube_id, existing.id)

    try:
        with db.begin_nested():
            resolved = resolve_ordered_authors(db, item_create.authors, cache=cache)

            item = Video(
                **item_create.model_dump(by_alias=False, exclude={"authors"}),
                youtube_id=youtube_id,
                creator_id=creator.id if creator is not None else None,
            )
            item.author_associations = [
                VideoAuthorAssociation(
                    author_id=resolved_author.author_id,
                    order=resolved_author.candidate.order,
                    role=resolved_author.candidate.role,
                )
                for resolved_author in resolved
            ]
            db.add(item)
            db.flush()
    except IntegrityError as exc:
        existing = find_video_by_youtube_id(db, youtube_id)
        if existing is None:
            raise

        save_to_logging_context(format_raised_exception_info_as_dict(exc))
        logger.info(msg="Lost a video insert race; the YouTube id is already stored.", extra=logging_context())
        raise DuplicateVideoError(youtube_id, existing.id) from exc

    save_to_logging_context({"created_video": item.id})
    logger.info(msg="Created video.", extra=logging_context())
    return item
