import re

ORCID_PATTERN = re.compile(r"^\d{4}-\d{4}-\d{4}-\d{3}[\dX]$")

MIN_AUTHOR_NAME_LENGTH = 2
MIN_PUBLICATION_TITLE_LENGTH = 3

DEFAULT_AUTHOR_SEARCH_LIMIT = 20
MAX_AUTHOR_SEARCH_LIMIT = 50

MAX_VIDEO_TITLE_LENGTH = 500
MAX_VIDEO_DESCRIPTION_LENGTH = 5000
MAX_VIDEO_SERIES_LENGTH = 255
MAX_YOUTUBE_ID_LENGTH = 50
YOUTUBE_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#/]+)"),
    re.compile(r"youtube\.com/v/([^&\n?#/]+)"),
)
