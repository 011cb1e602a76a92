from typing import Optional

import idutils

from labsite.lib.validation.constants import (
    MAX_VIDEO_DESCRIPTION_LENGTH,
    MAX_VIDEO_TITLE_LENGTH,
    MAX_YOUTUBE_ID_LENGTH,
    YOUTUBE_ID_PATTERNS,
)
from labsite.lib.validation.exceptions import ValidationError


def extract_youtube_id(url: str) -> Optional[str]:
    """Return the video id of a watch, short, embed or legacy YouTube URL, or None."""
    for pattern in YOUTUBE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)

    return None


def validate_youtube_url(url: str) -> str:
    url = url.strip()
    if not idutils.is_url(url) or ("youtube.com" not in url and "youtu.be" not in url):
        raise ValidationError(f"'{url}' is not a YouTube URL.", field="youtubeUrl")

    youtube_id = extract_youtube_id(url)
    if youtube_id is None or len(youtube_id) > MAX_YOUTUBE_ID_LENGTH:
        raise ValidationError(f"Could not find a video id in '{url}'.", field="youtubeUrl")

    return url


def validate_video_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise ValidationError("Video title is required.", field="title")
    if len(title) > MAX_VIDEO_TITLE_LENGTH:
        raise ValidationError(f"Video title must be at most {MAX_VIDEO_TITLE_LENGTH} characters.", field="title")
    return title


def validate_video_description(description: Optional[str]) -> Optional[str]:
    if description is not None and len(description) > MAX_VIDEO_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Video description must be at most {MAX_VIDEO_DESCRIPTION_LENGTH} characters.", field="description"
        )
    return description
