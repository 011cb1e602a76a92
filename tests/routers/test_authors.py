from labsite.models.author import Author

from tests.helpers.constants import (
    EXTRA_ORCID,
    TEST_AUTHOR_CANDIDATE,
    TEST_ORCID,
    TEST_SAVED_STANDALONE_AUTHOR,
    TEST_STANDALONE_AUTHOR,
    TEST_USER,
)
from tests.helpers.dependency_overrider import DependencyOverrider
from tests.helpers.util.author import create_author, credit_author


def test_search_authors(client, session, setup_lib_db):
    author = create_author(session, name="Ngozi Obi", email="ngozi.obi@uni.edu")
    credit_author(session, author, publications=2)

    response = client.get("/api/v1/authors/search", params={"query": "obi", "limit": 10})

    assert response.status_code == 200
    response_data = response.json()
    assert [item["type"] for item in response_data] == ["researcher", "author"]
    assert response_data[0]["name"] == TEST_USER["name"]
    assert response_data[0]["orcid"] == TEST_ORCID
    assert response_data[0]["avatarUrl"] == TEST_USER["image"]
    assert response_data[1]["name"] == "Ngozi Obi"
    assert response_data[1]["publicationCount"] == 2


def test_search_authors_as_anonymous_user(client, session, setup_lib_db, anonymous_app_overrides):
    with DependencyOverrider(anonymous_app_overrides):
        response = client.get("/api/v1/authors/search", params={"query": "amara"})

    assert response.status_code == 200
    assert len(response.json()) == 1


def test_search_authors_requires_query(client, setup_lib_db):
    response = client.get("/api/v1/authors/search", params={"query": ""})
    assert response.status_code == 422


def test_search_authors_rejects_large_limit(client, setup_lib_db):
    response = client.get("/api/v1/authors/search", params={"query": "obi", "limit": 51})
    assert response.status_code == 422


def test_search_authors_with_blank_query(client, setup_lib_db):
    response = client.get("/api/v1/authors/search", params={"query": "   "})

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["query"]


def test_fetch_author(client, standalone_author):
    response = client.get(f"/api/v1/authors/{standalone_author.id}")

    assert response.status_code == 200
    assert response.json() == {**TEST_SAVED_STANDALONE_AUTHOR, "id": standalone_author.id}


def test_fetch_nonexistent_author(client, setup_lib_db):
    response = client.get("/api/v1/authors/9999")

    assert response.status_code == 404
    assert "Author with ID 9999 not found" in response.json()["detail"]


def test_create_author(client, session, setup_lib_db, search_cache):
    search_cache.set(("raman", 10), [])

    response = client.post("/api/v1/authors", json=TEST_AUTHOR_CANDIDATE)

    assert response.status_code == 201
    response_data = response.json()
    assert response_data["name"] == TEST_AUTHOR_CANDIDATE["name"]
    assert response_data["researcherId"] is None
    assert session.query(Author).filter(Author.id == response_data["id"]).one_or_none() is not None
    assert len(search_cache) == 0


def test_create_author_with_existing_email(client, standalone_author):
    response = client.post(
        "/api/v1/authors", json={"name": "Johnny Smith", "email": TEST_STANDALONE_AUTHOR["email"]}
    )

    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["conflict"] == "email"
    assert detail["message"] == "Author with this email already exists"
    assert detail["suggestion"] == "Use the existing author record instead"
    assert detail["existing"]["type"] == "author"
    assert detail["existing"]["id"] == standalone_author.id


def test_create_author_with_existing_orcid(client, standalone_author):
    response = client.post("/api/v1/authors", json={"name": "Johnny Smith", "orcid": EXTRA_ORCID})

    assert response.status_code == 409
    assert response.json()["detail"]["conflict"] == "orcid"
    assert response.json()["detail"]["message"] == "Author with this ORCID already exists"


def test_create_author_for_researcher(client, test_researcher):
    researcher_id = test_researcher.id
    response = client.post("/api/v1/authors", json={"name": "Amara Obi", "orcid": TEST_ORCID})

    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["conflict"] == "already_researcher"
    assert detail["message"] == "This person is already a researcher in the system"
    assert detail["existing"]["type"] == "researcher"
    assert detail["existing"]["id"] == researcher_id


def test_create_potential_duplicate_author(client, standalone_author):
    response = client.post("/api/v1/authors", json={"name": "J. Smith", "affiliation": "MIT"})

    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["conflict"] == "potential_duplicate"
    assert detail["suggestion"] == "Consider using the existing author record instead"
    assert detail["existing"]["name"] == TEST_STANDALONE_AUTHOR["name"]


def test_cannot_create_author_with_author_id(client, standalone_author):
    response = client.post("/api/v1/authors", json={"name": "John Smith", "authorId": standalone_author.id})

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["authorId"]


def test_cannot_create_author_with_invalid_orcid(client, setup_lib_db):
    response = client.post("/api/v1/authors", json={"name": "John Smith", "orcid": "0000-0002-1825-0098"})
    assert response.status_code == 422


def test_cannot_create_author_as_anonymous_user(client, setup_lib_db, anonymous_app_overrides):
    with DependencyOverrider(anonymous_app_overrides):
        response = client.post("/api/v1/authors", json=TEST_AUTHOR_CANDIDATE)

    assert response.status_code == 401
    assert response.json()["detail"] in "Could not validate credentials"


def test_cannot_create_author_as_member(client, setup_lib_db, member_app_overrides):
    with DependencyOverrider(member_app_overrides):
        response = client.post("/api/v1/authors", json=TEST_AUTHOR_CANDIDATE)

    assert response.status_code == 401
    assert response.json()["detail"] in "You are not authorized to use this feature"


def test_can_create_author_as_admin(client, setup_lib_db, admin_app_overrides):
    with DependencyOverrider(admin_app_overrides):
        response = client.post("/api/v1/authors", json=TEST_AUTHOR_CANDIDATE)

    assert response.status_code == 201


def test_resolve_author_creates_then_reuses(client, setup_lib_db):
    candidate = {"name": "Amara Okafor", "email": "amara@uni.edu"}

    first = client.post("/api/v1/authors/resolve", json=candidate)
    second = client.post("/api/v1/authors/resolve", json=candidate)

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["created"] is True
    assert first.json()["rule"] == "created"
    assert second.json()["created"] is False
    assert second.json()["rule"] == "email"
    assert second.json()["author"]["id"] == first.json()["author"]["id"]


def test_resolve_author_by_researcher(client, test_researcher):
    researcher_id = test_researcher.id
    response = client.post("/api/v1/authors/resolve", json={"name": "Amara Obi", "researcherId": researcher_id})

    assert response.status_code == 200
    response_data = response.json()
    assert response_data["rule"] == "researcher_id"
    assert response_data["author"]["researcherId"] == researcher_id
    assert response_data["author"]["recordType"] == "Author"


def test_resolve_nonexistent_researcher(client, setup_lib_db):
    response = client.post("/api/v1/authors/resolve", json={"name": "Amara Obi", "researcherId": 9999})

    assert response.status_code == 404
    assert "researcher with id 9999 not found" in response.json()["detail"]


def test_resolve_nonexistent_author(client, setup_lib_db):
    response = client.post("/api/v1/authors/resolve", json={"name": "Amara Obi", "authorId": 9999})
    assert response.status_code == 404


def test_cannot_resolve_author_as_anonymous_user(client, setup_lib_db, anonymous_app_overrides):
    with DependencyOverrider(anonymous_app_overrides):
        response = client.post("/api/v1/authors/resolve", json=TEST_AUTHOR_CANDIDATE)

    assert response.status_code == 401
