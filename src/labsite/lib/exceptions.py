class NonexistentAuthorError(ValueError):
    """Raised when an author id does not match any author row."""

    pass


class NonexistentResearcherError(ValueError):
    """Raised when a researcher id does not match any research profile."""

    pass


class AuthorStoreInvariantError(RuntimeError):
    """
    Raised when an author insert violates a unique constraint but no row owning the conflicting
    researcher, ORCID or email can be found afterwards.
    """

    pass


class DuplicateVideoError(ValueError):
    """Raised when a video is submitted for a YouTube id that is already stored."""

    def __init__(self, youtube_id: str, existing_id: int):
        super().__init__(f"A video with YouTube id '{youtube_id}' already exists")
        self.youtube_id = youtube_id
        self.existing_id = existing_id
