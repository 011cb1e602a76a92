import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, selectinload

from labsite import deps
from labsite.lib.authentication import UserData
from labsite.lib.authorization import require_author_editor
from labsite.lib.logging import LoggedRoute
from labsite.lib.logging.context import logging_context, save_to_logging_context
from labsite.lib.search_cache import AuthorSearchCache
from labsite.lib.videos import create_video
from labsite.models.video import Video
from labsite.models.video_author import VideoAuthorAssociation
from labsite.routers.shared import (
    ACCESS_CONTROL_ERROR_RESPONSES,
    BASE_409_RESPONSE,
    BASE_422_RESPONSE,
    PUBLIC_ERROR_RESPONSES,
    ROUTER_BASE_PREFIX,
)
from labsite.view_models import video

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/videos",
    tags=["Videos"],
    responses={**PUBLIC_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

logger = logging.getLogger(__name__)


def fetch_video_by(db: Session, *criteria: Any) -> Video:
    item = (
        db.query(Video)
        .options(selectinload(Video.author_associations).joinedload(VideoAuthorAssociation.author))
        .filter(*criteria)
        .one_or_none()
    )

    if not item:
        logger.debug(msg="The requested video does not exist.", extra=logging_context())
        raise HTTPException(status_code=404, detail="Video not found")

    return item


@router.get("/{item_id}", status_code=200, response_model=video.Video, summary="Fetch a video by id")
def fetch_video(*, item_id: int, db: Session = Depends(deps.get_db)) -> Any:
    """
    Fetch a single video with its credited authors in order.
    """
    save_to_logging_context({"requested_resource": item_id})
    return fetch_video_by(db, Video.id == item_id)


@router.get(
    "/youtube/{youtube_id}",
    status_code=200,
    response_model=video.Video,
    summary="Fetch a video by YouTube id",
)
def fetch_video_by_youtube_id(*, youtube_id: str, db: Session = Depends(deps.get_db)) -> Any:
    save_to_logging_context({"requested_resource": youtube_id})
    return fetch_video_by(db, Video.youtube_id == youtube_id)


@router.post(
    "",
    status_code=201,
    response_model=video.Video,
    responses={**ACCESS_CONTROL_ERROR_RESPONSES, **BASE_409_RESPONSE, **BASE_422_RESPONSE},
    summary="Create a video",
)
def add_video(
    *,
    item_create: video.VideoCreate,
    db: Session = Depends(deps.get_db),
    cache: AuthorSearchCache = Depends(deps.get_author_search_cache),
    user_data: UserData = Depends(require_author_editor),
) -> Any:
    """
    Create a video. Credited authors are matched to existing researchers or authors where
    possible; new standalone authors are created for the rest.
    """
    item = create_video(db, item_create, creator=user_data.user, cache=cache)
    db.commit()
    db.refresh(item)
    return item
