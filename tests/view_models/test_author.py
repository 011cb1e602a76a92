import pytest
from pydantic import TypeAdapter

from labsite.view_models.author import (
    AuthorCandidate,
    AuthorConflict,
    AuthorIdentity,
    PublicationAuthorCandidate,
    ResearcherIdentity,
    StandaloneAuthorIdentity,
)

from tests.helpers.constants import BAD_CHECKSUM_ORCID, TEST_AUTHOR_CANDIDATE, TEST_ORCID


def test_create_author_candidate():
    candidate = AuthorCandidate(**TEST_AUTHOR_CANDIDATE)

    assert candidate.name == TEST_AUTHOR_CANDIDATE["name"]
    assert candidate.orcid == TEST_AUTHOR_CANDIDATE["orcid"]
    assert candidate.author_id is None
    assert candidate.researcher_id is None


def test_author_candidate_accepts_camelized_ids():
    candidate = AuthorCandidate(name="Amara Obi", researcherId=3, authorId=4)

    assert candidate.researcher_id == 3
    assert candidate.author_id == 4


def test_author_candidate_blank_fields_are_absent():
    candidate = AuthorCandidate(name="Amara Obi", email="", affiliation="  ", orcid=" ")

    assert candidate.email is None
    assert candidate.affiliation is None
    assert candidate.orcid is None


def test_author_candidate_lowercases_email():
    assert AuthorCandidate(name="Amara Obi", email="Amara@Uni.EDU").email == "amara@uni.edu"


@pytest.mark.parametrize("name", [None, "", "  ", "A"])
def test_cannot_create_author_candidate_with_invalid_name(name):
    with pytest.raises(ValueError):
        AuthorCandidate(name=name)


@pytest.mark.parametrize("field,value", [("email", "not-an-email"), ("orcid", BAD_CHECKSUM_ORCID), ("orcid", "1234")])
def test_cannot_create_author_candidate_with_invalid_identifier(field, value):
    with pytest.raises(ValueError) as exc_info:
        AuthorCandidate(**{**TEST_AUTHOR_CANDIDATE, field: value})

    assert field in str(exc_info.value)


def test_publication_author_candidate_defaults():
    candidate = PublicationAuthorCandidate(name="Amara Obi", order=0)

    assert candidate.is_corresponding is False
    assert candidate.contribution is None


def test_cannot_create_publication_author_candidate_with_negative_order():
    with pytest.raises(ValueError):
        PublicationAuthorCandidate(name="Amara Obi", order=-1)


def test_author_identity_is_discriminated_by_type():
    adapter = TypeAdapter(AuthorIdentity)

    researcher = adapter.validate_python({"type": "researcher", "id": 1, "userId": 2, "name": "Amara Obi"})
    author = adapter.validate_python({"type": "author", "id": 5, "name": "John Smith", "orcid": TEST_ORCID})

    assert isinstance(researcher, ResearcherIdentity)
    assert isinstance(author, StandaloneAuthorIdentity)
    assert author.publication_count == 0


def test_author_conflict_serializes_existing_identity():
    conflict = AuthorConflict(
        conflict="email",
        message="Author with this email already exists",
        suggestion="Use the existing author record instead",
        existing=StandaloneAuthorIdentity(id=5, name="John Smith", publication_count=2),
    )

    dumped = conflict.model_dump(by_alias=True, mode="json")
    assert dumped["existing"]["type"] == "author"
    assert dumped["existing"]["publicationCount"] == 2


def test_author_identity_list_keeps_group_order():
    identities = TypeAdapter(list[AuthorIdentity]).validate_python(
        [
            {"type": "researcher", "id": 1, "userId": 2, "name": "Amara Obi", "featured": True},
            {"type": "author", "id": 5, "name": "Ngozi Obi", "publicationCount": 3},
            {"type": "author", "id": 6, "name": "Chidi Obi"},
        ]
    )

    assert [type(identity) for identity in identities] == [
        ResearcherIdentity,
        StandaloneAuthorIdentity,
        StandaloneAuthorIdentity,
    ]
    assert identities[1].publication_count == 3


def test_author_identity_rejects_unknown_type():
    with pytest.raises(ValueError):
        TypeAdapter(AuthorIdentity).validate_python({"type": "editor", "id": 1, "name": "Amara Obi"})


def test_author_conflict_from_researcher_payload():
    conflict = AuthorConflict.model_validate(
        {
            "conflict": "already_researcher",
            "message": "This person is already a researcher in the system",
            "suggestion": "Select the researcher from the author search instead",
            "existing": {"type": "researcher", "id": 1, "userId": 2, "name": "Amara Obi", "orcid": TEST_ORCID},
        }
    )

    assert isinstance(conflict.existing, ResearcherIdentity)
    assert conflict.existing.orcid == TEST_ORCID


def test_author_conflict_without_existing_identity():
    conflict = AuthorConflict(conflict="potential_duplicate", message="A similar author", suggestion="Check first")
    assert conflict.existing is None
