import enum


class AuthorMatchRule(str, enum.Enum):
    """Which step of the resolution chain produced an author."""

    author_id = "author_id"
    researcher_id = "researcher_id"
    orcid = "orcid"
    email = "email"
    name_affiliation = "name_affiliation"
    created = "created"


class ConflictKind(str, enum.Enum):
    orcid = "orcid"
    email = "email"

    @property
    def label(self) -> str:
        return "ORCID" if self is ConflictKind.orcid else "email"
