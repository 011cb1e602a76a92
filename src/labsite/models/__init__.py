__all__ = [
    "author",
    "publication",
    "publication_author",
    "researcher",
    "role",
    "user",
    "video",
    "video_author",
]
