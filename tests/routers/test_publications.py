from labsite.models.author import Author
from labsite.models.publication import Publication

from tests.helpers.constants import TEST_AUTHOR_CANDIDATE, TEST_PUBLICATION, TEST_STANDALONE_AUTHOR, TEST_USER
from tests.helpers.dependency_overrider import DependencyOverrider

SINGLE_AUTHOR = [{**TEST_AUTHOR_CANDIDATE, "order": 0}]


def publication_payload(authors, **overrides):
    return {
        **{key: value for key, value in TEST_PUBLICATION.items() if key != "publication_date"},
        "publicationDate": TEST_PUBLICATION["publication_date"],
        **overrides,
        "authors": authors,
    }


def test_create_publication(client, session, test_researcher, standalone_author):
    researcher_id = test_researcher.id
    standalone_author_id = standalone_author.id
    payload = publication_payload(
        [
            {"name": "Amara Obi", "researcherId": researcher_id, "order": 0, "isCorresponding": True},
            {"name": "J. Smith", "affiliation": "MIT", "order": 1},
            {**TEST_AUTHOR_CANDIDATE, "order": 2, "contribution": "Data analysis"},
        ]
    )

    response = client.post("/api/v1/publications", json=payload)

    assert response.status_code == 201
    response_data = response.json()
    assert response_data["recordType"] == "Publication"
    assert response_data["title"] == TEST_PUBLICATION["title"]
    assert response_data["publicationDate"] == TEST_PUBLICATION["publication_date"]
    assert [author["order"] for author in response_data["authors"]] == [0, 1, 2]
    assert response_data["authors"][0]["author"]["researcherId"] == researcher_id
    assert response_data["authors"][0]["isCorresponding"] is True
    assert response_data["authors"][1]["author"]["id"] == standalone_author_id
    assert response_data["authors"][2]["author"]["name"] == TEST_AUTHOR_CANDIDATE["name"]
    assert response_data["authors"][2]["contribution"] == "Data analysis"

    creator = session.query(Publication).filter(Publication.id == response_data["id"]).one().creator
    assert creator.email == TEST_USER["email"]


def test_create_publication_with_duplicate_author_orders(client, session, setup_lib_db):
    payload = publication_payload(
        [
            {**TEST_AUTHOR_CANDIDATE, "order": 0},
            {"name": "Author Also Zero", "email": "also.zero@uni.edu", "order": 0},
            {"name": "Author One", "email": "one@uni.edu", "order": 1},
        ]
    )

    response = client.post("/api/v1/publications", json=payload)

    assert response.status_code == 422
    assert session.query(Author).count() == 0
    assert session.query(Publication).count() == 0


def test_create_publication_without_authors(client, setup_lib_db):
    response = client.post("/api/v1/publications", json=publication_payload([]))
    assert response.status_code == 422


def test_create_publication_with_same_author_twice(client, session, standalone_author):
    payload = publication_payload(
        [
            {"name": "John Smith", "email": TEST_STANDALONE_AUTHOR["email"], "order": 0},
            {"name": "J. Smith", "orcid": TEST_STANDALONE_AUTHOR["orcid"], "order": 1},
        ]
    )

    response = client.post("/api/v1/publications", json=payload)

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["authors"]
    assert session.query(Publication).count() == 0


def test_create_publication_with_nonexistent_author(client, session, setup_lib_db):
    payload = publication_payload(
        [
            {**TEST_AUTHOR_CANDIDATE, "order": 0},
            {"name": "Ghost Writer", "authorId": 9999, "order": 1},
        ]
    )

    response = client.post("/api/v1/publications", json=payload)

    assert response.status_code == 404
    assert session.query(Author).count() == 0


def test_cannot_create_publication_as_anonymous_user(client, setup_lib_db, anonymous_app_overrides):
    with DependencyOverrider(anonymous_app_overrides):
        response = client.post("/api/v1/publications", json=publication_payload(SINGLE_AUTHOR))

    assert response.status_code == 401


def test_cannot_create_publication_as_member(client, setup_lib_db, member_app_overrides):
    with DependencyOverrider(member_app_overrides):
        response = client.post("/api/v1/publications", json=publication_payload(SINGLE_AUTHOR))

    assert response.status_code == 401


def test_fetch_publication(client, setup_lib_db):
    created = client.post("/api/v1/publications", json=publication_payload(SINGLE_AUTHOR))
    assert created.status_code == 201

    response = client.get(f"/api/v1/publications/{created.json()['id']}")

    assert response.status_code == 200
    assert response.json() == created.json()


def test_fetch_nonexistent_publication(client, setup_lib_db):
    response = client.get("/api/v1/publications/9999")

    assert response.status_code == 404
    assert "Publication with ID 9999 not found" in response.json()["detail"]
