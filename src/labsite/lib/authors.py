import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from labsite.lib.author_names import affiliations_match, family_name, names_match
from labsite.lib.exceptions import AuthorStoreInvariantError, NonexistentAuthorError, NonexistentResearcherError
from labsite.lib.logging.context import format_raised_exception_info_as_dict, logging_context, save_to_logging_context
from labsite.lib.search_cache import AuthorSearchCache, invalidate_search_cache
from labsite.lib.validation.exceptions import ValidationError
from labsite.lib.validation.publication import validate_unique_author_orders
from labsite.models.author import Author
from labsite.models.enums.author_match import AuthorMatchRule, ConflictKind
from labsite.models.researcher import Researcher
from labsite.models.user import User
from labsite.view_models.author import AuthorCandidate, OrderedAuthorCandidate, PublicationAuthorCandidate

logger = logging.getLogger(__name__)


####################################################################################################
# Results
####################################################################################################


@dataclass
class AuthorResolution:
    author: Author
    rule: AuthorMatchRule
    created: bool = False


@dataclass
class ResolvedAuthor:
    author: Author
    candidate: OrderedAuthorCandidate
    rule: AuthorMatchRule
    created: bool = False

    @property
    def author_id(self) -> int:
        return self.author.id


@dataclass
class AuthorCreated:
    author: Author

    conflict = None
    message = "Author created"
    suggestion = ""


@dataclass
class DuplicateConflict:
    kind: ConflictKind
    existing: Author

    suggestion = "Use the existing author record instead"

    @property
    def conflict(self) -> str:
        return self.kind.value

    @property
    def message(self) -> str:
        return f"Author with this {self.kind.label} already exists"


@dataclass
class AlreadyResearcher:
    kind: ConflictKind
    researcher: Researcher

    conflict = "already_researcher"
    message = "This person is already a researcher in the system"
    suggestion = "Select the researcher from the author search instead"


@dataclass
class PotentialDuplicate:
    existing: Author

    conflict = "potential_duplicate"
    message = "A similar author (same name and affiliation) already exists"
    suggestion = "Consider using the existing author record instead"


AuthorCreationResult = Union[AuthorCreated, DuplicateConflict, AlreadyResearcher, PotentialDuplicate]


####################################################################################################
# Lookups
####################################################################################################


def find_author_by_orcid(db: Session, orcid: str) -> Optional[Author]:
    return db.query(Author).filter(Author.orcid == orcid).one_or_none()


def find_author_by_email(db: Session, email: str) -> Optional[Author]:
    return db.query(Author).filter(Author.email == email.lower()).one_or_none()


def find_researcher_by_orcid(db: Session, orcid: str) -> Optional[Researcher]:
    return db.query(Researcher).filter(Researcher.orcid == orcid).one_or_none()


def find_researcher_by_email(db: Session, email: str) -> Optional[Researcher]:
    # Account emails are only unique as typed; the oldest account wins a case-insensitive tie.
    return (
        db.query(Researcher)
        .join(Researcher.user)
        .filter(func.lower(User.email) == email.lower())
        .order_by(User.id)
        .first()
    )


def find_similar_author(db: Session, name: str, affiliation: str) -> Optional[Author]:
    """
    Return the first author (by id) whose name and affiliation loosely match the given ones. The
    database narrows the candidates to names containing the family name; the comparison itself is
    done by ``names_match`` and ``affiliations_match``.
    """
    family = family_name(name)
    if family is None:
        return None

    candidates = (
        db.query(Author)
        .filter(Author.affiliation.isnot(None))
        .filter(Author.name.icontains(family, autoescape=True))
        .order_by(Author.id)
        .all()
    )
    return next(
        (
            author
            for author in candidates
            if names_match(name, author.name) and affiliations_match(affiliation, author.affiliation)
        ),
        None,
    )


def _refetch_conflicting_author(db: Session, author: Author) -> Optional[Author]:
    if author.researcher_id is not None:
        existing = db.query(Author).filter(Author.researcher_id == author.researcher_id).one_or_none()
        if existing is not None:
            return existing
    if author.orcid is not None:
        existing = find_author_by_orcid(db, author.orcid)
        if existing is not None:
            return existing
    if author.email is not None:
        return find_author_by_email(db, author.email)

    return None


####################################################################################################
# Creation
####################################################################################################


def _insert_author(db: Session, author: Author) -> tuple[Author, bool]:
    """
    Insert *author* inside a savepoint. If a concurrent transaction already holds the researcher,
    ORCID or email, the savepoint is rolled back and that transaction's row is returned instead.

    Returns the stored author and whether this call created it.
    """
    try:
        with db.begin_nested():
            db.add(author)
            db.flush()
    except IntegrityError as exc:
        save_to_logging_context(format_raised_exception_info_as_dict(exc))
        existing = _refetch_conflicting_author(db, author)

        if existing is None:
            logger.error(
                msg="Author insert violated a unique constraint, but no conflicting author could be found.",
                extra=logging_context(),
            )
            raise AuthorStoreInvariantError(
                "Author insert violated a unique constraint, but no conflicting author could be found."
            ) from exc

        save_to_logging_context({"concurrent_author": existing.id})
        logger.info(msg="Lost an author insert race; using the concurrently created author.", extra=logging_context())
        return existing, False

    save_to_logging_context({"created_author": author.id})
    logger.info(msg="Created author.", extra=logging_context())
    return author, True


def _author_from_candidate(candidate: AuthorCandidate) -> Author:
    return Author(
        name=candidate.name,
        email=candidate.email,
        affiliation=candidate.affiliation,
        orcid=candidate.orcid,
        researcher_id=None,
    )


def _author_from_researcher(researcher: Researcher) -> Author:
    return Author(
        name=researcher.name,
        email=researcher.email.lower() if researcher.email else None,
        affiliation=researcher.affiliation,
        orcid=researcher.orcid,
        researcher_id=researcher.id,
    )


def _resolve_researcher(db: Session, researcher: Researcher, rule: AuthorMatchRule) -> AuthorResolution:
    linked = db.query(Author).filter(Author.researcher_id == researcher.id).one_or_none()
    if linked is not None:
        return AuthorResolution(linked, rule)

    author, created = _insert_author(db, _author_from_researcher(researcher))
    if author.researcher_id != researcher.id:
        # A standalone author already holds this researcher's ORCID or email.
        save_to_logging_context({"researcher": researcher.id, "standalone_author": author.id})
        logger.warning(
            msg="Researcher resolved to an existing standalone author that is not linked to them.",
            extra=logging_context(),
        )

    return AuthorResolution(author, rule, created)


####################################################################################################
# Main operations
####################################################################################################


def resolve_author(
    db: Session,
    candidate: AuthorCandidate,
    accept_fuzzy_match: bool = False,
    cache: Optional[AuthorSearchCache] = None,
) -> AuthorResolution:
    """
    Map an author candidate to exactly one author row, creating a standalone author only when
    nothing matches. Rules are tried in this order and the first match wins:

    1. ``author_id``: that author, or ``NonexistentAuthorError``.
    2. ``researcher_id``: the author linked to that researcher, created from the researcher's
       profile if missing, or ``NonexistentResearcherError``.
    3. ORCID: an author with the ORCID, else the author of a researcher with the ORCID.
    4. Email: an author with the email, else the author of a researcher whose account has it.
    5. Name and affiliation, only when ``accept_fuzzy_match`` is set.
    6. A new standalone author.

    The session is flushed but not committed.
    """
    save_to_logging_context(
        {
            "author_candidate": {
                "name": candidate.name,
                "email": candidate.email,
                "orcid": candidate.orcid,
                "researcher_id": candidate.researcher_id,
                "author_id": candidate.author_id,
            }
        }
    )

    if candidate.author_id is not None:
        author = db.query(Author).filter(Author.id == candidate.author_id).one_or_none()
        if author is None:
            logger.info(msg="Candidate named an author that does not exist.", extra=logging_context())
            raise NonexistentAuthorError(f"author with id {candidate.author_id} not found")

        resolution = AuthorResolution(author, AuthorMatchRule.author_id)

    elif candidate.researcher_id is not None:
        researcher = db.query(Researcher).filter(Researcher.id == candidate.researcher_id).one_or_none()
        if researcher is None:
            logger.info(msg="Candidate named a researcher that does not exist.", extra=logging_context())
            raise NonexistentResearcherError(f"researcher with id {candidate.researcher_id} not found")

        resolution = _resolve_researcher(db, researcher, AuthorMatchRule.researcher_id)

    else:
        resolution = _match_by_identity(db, candidate, accept_fuzzy_match)

    save_to_logging_context({"author_match_rule": resolution.rule.value, "resolved_author": resolution.author.id})
    logger.debug(msg="Resolved author candidate.", extra=logging_context())

    if resolution.created:
        invalidate_search_cache(cache)

    return resolution


def _match_by_identity(db: Session, candidate: AuthorCandidate, accept_fuzzy_match: bool) -> AuthorResolution:
    if candidate.orcid is not None:
        author = find_author_by_orcid(db, candidate.orcid)
        if author is not None:
            return AuthorResolution(author, AuthorMatchRule.orcid)

        researcher = find_researcher_by_orcid(db, candidate.orcid)
        if researcher is not None:
            return _resolve_researcher(db, researcher, AuthorMatchRule.orcid)

    if candidate.email is not None:
        author = find_author_by_email(db, candidate.email)
        if author is not None:
            return AuthorResolution(author, AuthorMatchRule.email)

        researcher = find_researcher_by_email(db, candidate.email)
        if researcher is not None:
            return _resolve_researcher(db, researcher, AuthorMatchRule.email)

    if accept_fuzzy_match and candidate.affiliation is not None:
        author = find_similar_author(db, candidate.name, candidate.affiliation)
        if author is not None:
            return AuthorResolution(author, AuthorMatchRule.name_affiliation)

    author, created = _insert_author(db, _author_from_candidate(candidate))
    rule = AuthorMatchRule.created if created else _rule_for_existing(author, candidate)
    return AuthorResolution(author, rule, created)


def _rule_for_existing(author: Author, candidate: AuthorCandidate) -> AuthorMatchRule:
    if candidate.orcid is not None and author.orcid == candidate.orcid:
        return AuthorMatchRule.orcid
    return AuthorMatchRule.email


def _researcher_conflict(kind: ConflictKind, researcher: Researcher) -> AuthorCreationResult:
    if researcher.author is not None:
        return DuplicateConflict(kind, researcher.author)
    return AlreadyResearcher(kind, researcher)


def create_author(
    db: Session, candidate: AuthorCandidate, cache: Optional[AuthorSearchCache] = None
) -> AuthorCreationResult:
    """
    Create a standalone author unless the candidate's ORCID, email or name and affiliation already
    belong to someone. Conflicts are returned, not raised; the caller decides what to show.
    """
    if candidate.author_id is not None or candidate.researcher_id is not None:
        raise ValidationError(
            "Candidates that name an existing author or researcher must be resolved, not created.",
            field="authorId" if candidate.author_id is not None else "researcherId",
        )

    save_to_logging_context(
        {"author_candidate": {"name": candidate.name, "email": candidate.email, "orcid": candidate.orcid}}
    )

    result: Optional[AuthorCreationResult] = None
    if candidate.orcid is not None:
        author = find_author_by_orcid(db, candidate.orcid)
        researcher = find_researcher_by_orcid(db, candidate.orcid) if author is None else None
        if author is not None:
            result = DuplicateConflict(ConflictKind.orcid, author)
        elif researcher is not None:
            result = _researcher_conflict(ConflictKind.orcid, researcher)

    if result is None and candidate.email is not None:
        author = find_author_by_email(db, candidate.email)
        researcher = find_researcher_by_email(db, candidate.email) if author is None else None
        if author is not None:
            result = DuplicateConflict(ConflictKind.email, author)
        elif researcher is not None:
            result = _researcher_conflict(ConflictKind.email, researcher)

    if result is None and candidate.affiliation is not None:
        similar = find_similar_author(db, candidate.name, candidate.affiliation)
        if similar is not None:
            result = PotentialDuplicate(similar)

    if result is not None:
        save_to_logging_context({"author_conflict": result.conflict})
        logger.info(msg="Declined to create author; a matching identity exists.", extra=logging_context())
        return result

    author, created = _insert_author(db, _author_from_candidate(candidate))
    if not created:
        rule = _rule_for_existing(author, candidate)
        return DuplicateConflict(ConflictKind.orcid if rule is AuthorMatchRule.orcid else ConflictKind.email, author)

    invalidate_search_cache(cache)
    return AuthorCreated(author)


def resolve_ordered_authors(
    db: Session,
    candidates: Sequence[OrderedAuthorCandidate],
    cache: Optional[AuthorSearchCache] = None,
) -> list[ResolvedAuthor]:
    """
    Resolve the credited authors of a submission, in order. Name and affiliation matches are
    accepted. Either every candidate resolves or no author created by this call survives.

    Raises
    ------
    ValidationError
        If order values repeat or if two candidates resolve to the same author.
    """
    validate_unique_author_orders(candidate.order for candidate in candidates)

    resolved: list[ResolvedAuthor] = []
    with db.begin_nested():
        seen: dict[int, OrderedAuthorCandidate] = {}
        for candidate in sorted(candidates, key=lambda c: c.order):
            resolution = resolve_author(db, candidate, accept_fuzzy_match=True)

            if resolution.author.id in seen:
                save_to_logging_context({"duplicate_author": resolution.author.id})
                logger.info(msg="Two credited authors resolved to the same author.", extra=logging_context())
                raise ValidationError(
                    f"Authors at positions {seen[resolution.author.id].order} and {candidate.order} "
                    f"are the same person ({resolution.author.name}).",
                    field="authors",
                )

            seen[resolution.author.id] = candidate
            resolved.append(ResolvedAuthor(resolution.author, candidate, resolution.rule, resolution.created))

    if any(item.created for item in resolved):
        invalidate_search_cache(cache)

    return resolved


def resolve_authors_for_publication(
    db: Session,
    candidates: Sequence[PublicationAuthorCandidate],
    cache: Optional[AuthorSearchCache] = None,
) -> list[ResolvedAuthor]:
    """
    Resolve every author of a publication submission. A publication needs at least one author; the
    rest is ``resolve_ordered_authors``.
    """
    if not candidates:
        raise ValidationError("A publication needs at least one author.", field="authors")

    return resolve_ordered_authors(db, candidates, cache=cache)
